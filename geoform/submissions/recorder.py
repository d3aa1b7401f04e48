"""Submission recorder — persists a resolved submission, then mirrors it."""

from __future__ import annotations

import structlog

from geoform.errors import RecordError
from geoform.repositories.submission import SubmissionRepository
from geoform.schemas.submission import RecordOutcome, Submission
from geoform.sheets.client import SheetsMirror

logger = structlog.get_logger()


class SubmissionRecorder:
    """Stores the submission row, then appends it to the spreadsheet."""

    def __init__(self, repository: SubmissionRepository, mirror: SheetsMirror):
        self.repository = repository
        self.mirror = mirror

    async def record(self, submission: Submission) -> RecordOutcome:
        """Persist and mirror a submission whose coordinates are already resolved.

        The store commit and the spreadsheet append are independent. If the
        append fails, the row stays committed and MirrorError propagates; the
        caller reports failure and nothing is rolled back or retried.

        Raises:
            StoreError: insert or commit failed, the sheet was not touched
            MirrorError: the row is stored but not mirrored
        """
        row = await self.repository.add_submission(submission)
        await self.repository.commit()

        logger.info(
            "submission_stored",
            submission_id=row.id,
            address=submission.address,
            newsletter=submission.newsletter,
        )

        try:
            mirrored_range = await self.mirror.append_row(submission.mirror_row())
        except RecordError as e:
            logger.error(
                "submission_not_mirrored",
                submission_id=row.id,
                error=str(e),
            )
            raise

        return RecordOutcome(
            submission_id=row.id,
            latitude=submission.latitude,
            longitude=submission.longitude,
            mirrored_range=mirrored_range,
        )
