"""
Maps HTTP status codes to human readable categories.
"""

SUCCESS = "Success"
REDIRECTION = "Redirection"
INVALID_REQUEST = "Invalid request"
AUTHENTICATION_REQUIRED = "Authentication required"
FORBIDDEN = "Forbidden"
NOT_FOUND = "Not found"
CLIENT_ERROR = "Client error"
SERVER_ERROR = "Server error"
UNKNOWN_STATUS = "Unknown status"

CATEGORIES = (
    SUCCESS,
    REDIRECTION,
    INVALID_REQUEST,
    AUTHENTICATION_REQUIRED,
    FORBIDDEN,
    NOT_FOUND,
    CLIENT_ERROR,
    SERVER_ERROR,
    UNKNOWN_STATUS,
)

# 400, 401, 403 and 404 are checked before the generic 4xx bucket
_CLIENT_ERRORS = {
    400: INVALID_REQUEST,
    401: AUTHENTICATION_REQUIRED,
    403: FORBIDDEN,
    404: NOT_FOUND,
}


def classify(code: int) -> str:
    """Return the category label for an HTTP status code."""
    if 200 <= code < 300:
        return SUCCESS
    elif 300 <= code < 400:
        return REDIRECTION
    elif 400 <= code < 500:
        return _CLIENT_ERRORS.get(code, CLIENT_ERROR)
    elif 500 <= code < 600:
        return SERVER_ERROR
    return UNKNOWN_STATUS
