from fastapi import status


class BookingError(Exception):
    """Base for every failure the booking site reports to a guest."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Something went wrong. Please try again."

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


# Raised before anything is written

class BookingValidationError(BookingError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Please complete all required fields."


class ScreenshotValidationError(BookingValidationError):
    message = "Please upload an image file for the transaction screenshot"


class NotEnoughRoomsError(BookingError):
    status_code = status.HTTP_409_CONFLICT
    message = "Not enough rooms available"


class ContactValidationError(BookingError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Please fill in your name, email and message."


# Raised while talking to the datastore or object storage

class RoomUnavailableError(BookingError):
    status_code = status.HTTP_409_CONFLICT
    message = "This room is already booked for the selected dates."


class DataStoreError(BookingError):
    status_code = status.HTTP_502_BAD_GATEWAY
    message = "Something went wrong while creating your booking."


class StorageError(BookingError):
    status_code = status.HTTP_502_BAD_GATEWAY
    message = "Failed to upload the transaction screenshot."
