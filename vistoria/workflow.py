# vistoria/workflow.py
"""
Session state and the login → dashboard → new inspection → dashboard flow.

The Streamlit script keeps one ``WorkflowController`` in ``st.session_state``
and calls these methods from its buttons; nothing here imports Streamlit,
so the whole flow can be driven directly from tests.
"""
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from vistoria.inspection_log import InspectionLog
from vistoria.models import (
    STATUS_DEFECTIVE,
    Inspection,
    InspectionDraft,
    MissingRequiredField,
    find_equipment,
    normalize_company,
    toggle_area,
)
from vistoria.registry import CompanyInspectionRegistry

logger = logging.getLogger(__name__)

VIEW_LOGGED_OUT = "logged_out"
VIEW_DASHBOARD = "dashboard"
VIEW_NEW_INSPECTION = "new_inspection"


@dataclass
class SessionIdentity:
    analyst: str
    code: str


@dataclass
class SessionContext:
    """Everything one browser session owns."""

    identity: Optional[SessionIdentity] = None
    registry: CompanyInspectionRegistry = field(default_factory=CompanyInspectionRegistry)
    log: InspectionLog = field(default_factory=InspectionLog)


def new_inspection_id() -> str:
    return uuid.uuid4().hex


class WorkflowController:
    def __init__(
        self,
        context: Optional[SessionContext] = None,
        now: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = new_inspection_id,
    ):
        self.context = context if context is not None else SessionContext()
        self.view = VIEW_LOGGED_OUT
        self.draft: Optional[InspectionDraft] = None
        # bumped for every new form so widget keys start empty
        self.form_serial = 0
        self._now = now
        self._id_factory = id_factory

    def _ignored(self, action: str) -> None:
        logger.warning("Ignoring %s while in view %s", action, self.view)

    # ---------------------------
    # Transitions
    # ---------------------------
    def submit_login(self, name: str, code: str) -> bool:
        if self.view != VIEW_LOGGED_OUT:
            self._ignored("login")
            return False
        if not name or not code:
            logger.info("Login not attempted: name and code are required")
            return False
        self.context.identity = SessionIdentity(analyst=name, code=code)
        self.view = VIEW_DASHBOARD
        logger.info("Analyst %s logged in", name)
        return True

    def request_new_inspection(self) -> bool:
        if self.view != VIEW_DASHBOARD:
            self._ignored("new inspection")
            return False
        self.draft = InspectionDraft()
        self.form_serial += 1
        self.view = VIEW_NEW_INSPECTION
        return True

    def cancel_new_inspection(self) -> bool:
        if self.view != VIEW_NEW_INSPECTION:
            self._ignored("cancel")
            return False
        self.draft = None
        self.view = VIEW_DASHBOARD
        logger.info("New inspection cancelled")
        return True

    def toggle_area(self, index: int) -> None:
        if self.view != VIEW_NEW_INSPECTION or self.draft is None:
            self._ignored("area toggle")
            return
        self.draft.areas = toggle_area(self.draft.areas, index)

    def submit_inspection(self, draft: Optional[InspectionDraft] = None) -> Optional[Inspection]:
        """
        Record the draft and return the new Inspection, or None when the
        form is incomplete (nothing is recorded and the form stays open).
        """
        if self.view != VIEW_NEW_INSPECTION:
            self._ignored("submit")
            return None
        draft = draft if draft is not None else self.draft
        if draft is None:
            self._ignored("submit without a draft")
            return None
        try:
            draft.validate()
        except MissingRequiredField as e:
            logger.info("Inspection not submitted: %s", e)
            return None

        identity = self.context.identity
        now = self._now()
        company = normalize_company(draft.company)
        inspection = Inspection(
            id=self._id_factory(),
            timestamp=now,
            company=company,
            equipment=find_equipment(draft.equipment_id).name,
            model=draft.model,
            status=draft.status,
            defect_type=draft.defect_type if draft.status == STATUS_DEFECTIVE else None,
            analyst=identity.analyst if identity else "",
            analyst_code=identity.code if identity else "",
            inspection_areas=tuple(draft.areas),
            company_inspection_time=self.context.registry.resolve_start_time(company, now),
        )
        self.context.log.record(inspection)
        self.draft = None
        self.view = VIEW_DASHBOARD
        logger.info(
            "Inspection %s recorded: company=%s model=%s status=%s",
            inspection.id, inspection.company, inspection.model, inspection.status,
        )
        return inspection
