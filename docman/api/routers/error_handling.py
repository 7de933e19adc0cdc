"""
Ingestion error handling utilities.

Provides a decorator for consistent error handling across ingestion
API endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from docman.core.exceptions import (
    InvalidTransitionError,
    JobNotFoundError,
    RemoteUnavailableError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])


def handle_ingestion_errors(func: F) -> F:
    """
    Decorator to handle ingestion errors and transform them into HTTPExceptions.

    - JobNotFoundError -> 404
    - InvalidTransitionError -> 409
    - RemoteUnavailableError -> 502
    - anything else -> 500 (logged with traceback)
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except JobNotFoundError as e:
            logger.warning("Ingestion job not found", extra={"job_id": e.job_id})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except InvalidTransitionError as e:
            logger.warning(
                "Ingestion transition rejected",
                extra={"job_id": e.job_id, "current_status": e.current_status, "event": e.event},
            )
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message)

        except RemoteUnavailableError as e:
            logger.error(
                "Ingestion worker unavailable",
                extra={"job_id": e.job_id, "operation": e.operation, "error": e.reason},
            )
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail={"message": e.message, "job_id": e.job_id},
            )

        except HTTPException:
            raise

        except Exception as e:
            logger.exception(
                "Unexpected failure in ingestion operation",
                extra={"error": str(e)}
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred during ingestion operation",
            )

    return wrapper  # type: ignore
