"""Form submission API — called by the public web form."""

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import PlainTextResponse

from geoform.api.dependencies import get_recorder, get_repository, get_resolver
from geoform.errors import GeoformError
from geoform.geocoding.resolver import AddressResolver
from geoform.repositories.submission import SubmissionRepository
from geoform.schemas.submission import AddressOut, Submission, SubmissionIn, SubmitResponse
from geoform.submissions.recorder import SubmissionRecorder

logger = structlog.get_logger()

router = APIRouter(tags=["submissions"])

SUBMIT_PATH = "/submit"
SUCCESS_MESSAGE = "Success! Your information has been saved."
SUBMIT_FAILED_TEXT = "Failed to save data."
LIST_FAILED_TEXT = "Failed to retrieve addresses."


@router.post(SUBMIT_PATH, response_model=SubmitResponse)
async def submit(
    data: SubmissionIn,
    resolver: AddressResolver = Depends(get_resolver),
    recorder: SubmissionRecorder = Depends(get_recorder),
):
    """Geocode the address (cache first), store the submission and mirror it.

    Any failure returns 500 with a fixed text body; details go to the log only.
    """
    try:
        geocoded = await resolver.resolve(data.address)
        outcome = await recorder.record(
            Submission(
                name=data.name,
                email=data.email,
                address=data.address,
                newsletter=data.newsletter,
                latitude=geocoded.latitude,
                longitude=geocoded.longitude,
            )
        )
    except GeoformError as e:
        logger.error(
            "submission_failed",
            error_type=type(e).__name__,
            error=str(e),
            address=data.address,
        )
        return PlainTextResponse(SUBMIT_FAILED_TEXT, status_code=500)
    except Exception:
        logger.exception("submission_failed", error_type="unexpected", address=data.address)
        return PlainTextResponse(SUBMIT_FAILED_TEXT, status_code=500)

    logger.info(
        "submission_recorded",
        submission_id=outcome.submission_id,
        address=geocoded.address,
        latitude=outcome.latitude,
        longitude=outcome.longitude,
        cached=geocoded.cached,
        mirrored_range=outcome.mirrored_range,
    )
    return SubmitResponse(message=SUCCESS_MESSAGE)


@router.get("/addresses", response_model=list[AddressOut])
async def list_addresses(
    repository: SubmissionRepository = Depends(get_repository),
):
    """Every stored submission's address and coordinates, duplicates included."""
    try:
        return await repository.list_addresses()
    except GeoformError as e:
        logger.error("address_listing_failed", error=str(e))
        return PlainTextResponse(LIST_FAILED_TEXT, status_code=500)
    except Exception:
        logger.exception("address_listing_failed", error_type="unexpected")
        return PlainTextResponse(LIST_FAILED_TEXT, status_code=500)


async def submission_validation_error(request: Request, exc: RequestValidationError):
    """A malformed /submit body is a failed submission: fixed 500 text, details logged.

    Other routes keep FastAPI's default 422 response.
    """
    if request.url.path != SUBMIT_PATH:
        return await request_validation_exception_handler(request, exc)

    logger.error(
        "submission_failed",
        error_type="RequestValidationError",
        errors=[
            {"loc": list(err.get("loc", ())), "type": err.get("type")}
            for err in exc.errors()
        ],
    )
    return PlainTextResponse(SUBMIT_FAILED_TEXT, status_code=500)
