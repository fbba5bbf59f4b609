from fastapi import status


class CardError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Error generating image"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UsernameMissingError(CardError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Username not specified"


class PlayerNotFoundError(CardError):
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User '{username}' not found")


class CardRenderError(CardError):
    pass
