# meeting_agent/core/meetings/exceptions.py


class MeetingStoreError(Exception):
    """Raised when the meeting store fails to read or write."""

    def __init__(self, message: str = "Meeting store error"):
        super().__init__(message)


class MeetingNotFoundError(MeetingStoreError):
    """Raised when a meeting id does not exist in the store."""

    def __init__(self, meeting_id: str):
        self.meeting_id = meeting_id
        super().__init__(f"Meeting not found: {meeting_id}")


__all__ = ["MeetingStoreError", "MeetingNotFoundError"]
