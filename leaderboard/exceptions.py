"""Errors raised by the leaderboard service layer.

Each carries the HTTP status the API answers with.
"""


class LeaderboardError(Exception):
    status_code = 400
    default_message = "Leaderboard request failed."

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NoPendingScore(LeaderboardError):
    default_message = "No test attempt found in session"


class CaptchaFailure(LeaderboardError):
    default_message = "Recaptcha verification failed"


class CaptchaRequired(CaptchaFailure):
    default_message = "Recaptcha token is missing"


class CaptchaFailed(CaptchaFailure):
    pass


class UpstreamUnavailable(LeaderboardError):
    status_code = 500
    default_message = "Internal server error"
