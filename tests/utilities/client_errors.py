"""Helpers for building botocore errors in tests."""

from botocore.exceptions import ClientError


def make_client_error(code: str, message: str, operation: str, status_code: int = 400) -> ClientError:
    return ClientError(
        {
            "Error": {"Code": code, "Message": message},
            "ResponseMetadata": {"HTTPStatusCode": status_code},
        },
        operation,
    )
