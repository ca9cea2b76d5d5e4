from fastapi import HTTPException, status

# Domain exceptions raised by the service layer

class DuplicateEmailError(HTTPException):
    def __init__(self, detail: str = "Email already registered"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)

class InvalidCredentialsError(HTTPException):
    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )

class SlotNotFoundError(HTTPException):
    def __init__(self, detail: str = "Slot not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)

class SlotConflictError(HTTPException):
    """The slot already has a booking; the caller should pick another slot."""

    def __init__(self, detail: str = "This slot is already booked."):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)

class StorageError(HTTPException):
    def __init__(self, detail: str = "An unexpected error occurred."):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )
