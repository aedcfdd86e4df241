from rest_framework import status
from rest_framework.exceptions import APIException


class DataUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Progress data is unavailable, try again later."
    default_code = "data_unavailable"


class SessionNotFound(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Quiz session not found."
    default_code = "session_not_found"


class SessionConflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Quiz session is not in a state that allows this action."
    default_code = "session_conflict"
