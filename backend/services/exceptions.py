"""Domain errors raised by achievement services and mapped to HTTP by routers."""


class AchievementError(Exception):
    """Base class for achievement domain errors."""

    code = "achievement_error"


class AchievementNotFound(AchievementError):
    code = "achievement_not_found"

    def __init__(self, achievement_id: int):
        self.achievement_id = achievement_id
        super().__init__(f"Achievement {achievement_id} not found")


class ProgressNotFound(AchievementError):
    code = "progress_not_found"

    def __init__(self, progress_id: int):
        self.progress_id = progress_id
        super().__init__(f"Achievement progress {progress_id} not found")


class ClaimNotAllowed(AchievementError):
    code = "claim_not_allowed"

    def __init__(self, progress_id: int):
        self.progress_id = progress_id
        super().__init__(f"Achievement progress {progress_id} is still locked")
