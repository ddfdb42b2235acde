from fastapi import status


class SearchError(Exception):
    """A search that could not be completed. Nothing partial is returned."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreQueryFailure(SearchError):
    pass


class RowDecodeFailure(SearchError):
    pass
