"""
Router error handling.

Decorator mapping workflow exceptions that escape an action boundary onto
HTTP errors, with consistent logging.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from pydantic import ValidationError as PydanticValidationError

from session_desk.core.exceptions import (
    PortalRequestError,
    SessionDeskException,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_session_desk_errors(func: F) -> F:
    """
    Transform workflow errors into HTTPExceptions.

    - ValidationError / pydantic errors -> 422
    - PortalRequestError -> backend's 401/403/404, otherwise 502
    - any other SessionDeskException -> 500
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except ValidationError as e:
            logger.warning("Invalid request", extra={"error": e.message, **e.details})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.message,
            )

        except PydanticValidationError as e:
            logger.warning("Pydantic validation error", extra={"error": str(e)})
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=e.errors(include_url=False, include_context=False),
            )

        except PortalRequestError as e:
            passthrough = {401, 403, 404}
            code = e.status_code if e.status_code in passthrough else status.HTTP_502_BAD_GATEWAY
            logger.warning(
                "Backend request failed",
                extra={"operation": e.operation, "status_code": e.status_code, "error": e.message},
            )
            raise HTTPException(status_code=code, detail=e.message)

        except SessionDeskException as e:
            logger.exception("Unexpected workflow failure", extra={"error": e.message})
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=e.message,
            )

    return wrapper  # type: ignore
