from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError

from ..csv_export import to_csv
from ..db import get_store
from ..reporter import report_to_dict, summarize
from ..store import AssessmentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["export"])


@router.get("/export-csv")
def export_csv(store: AssessmentStore = Depends(get_store)):
    try:
        records = store.all()
    except SQLAlchemyError as e:
        logger.error("CSV export failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to export CSV")
    logger.info("Exporting %d assessments", len(records))
    return Response(
        content=to_csv(records),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": 'attachment; filename="assessments.csv"'},
    )


@router.get("/patterns")
def patterns(store: AssessmentStore = Depends(get_store)):
    try:
        records = store.all()
    except SQLAlchemyError as e:
        logger.error("Pattern report failed: %s", e)
        raise HTTPException(status_code=500, detail="Failed to build pattern report")
    return report_to_dict(summarize(records))
