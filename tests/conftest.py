from datetime import datetime, timedelta
from itertools import count

import pytest

from vistoria.models import InspectionDraft
from vistoria.workflow import SessionContext, WorkflowController


class FakeClock:
    """Returns a fixed start time, advancing one minute per call."""

    def __init__(self, start=datetime(2024, 3, 5, 9, 30, 0)):
        self.current = start

    def __call__(self):
        value = self.current
        self.current = self.current + timedelta(minutes=1)
        return value


def _make_draft(company=("1", "2", "3"), equipment_id="1", model="MC-330K",
                status="em_uso", defect_type=None):
    return InspectionDraft(
        company=list(company),
        equipment_id=equipment_id,
        model=model,
        status=status,
        defect_type=defect_type,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def context():
    return SessionContext()


@pytest.fixture
def controller(context, clock):
    ids = count(1)
    return WorkflowController(context, now=clock, id_factory=lambda: f"insp-{next(ids)}")


@pytest.fixture
def logged_in(controller):
    controller.submit_login("Ana Souza", "4321")
    return controller


@pytest.fixture
def make_draft():
    return _make_draft


@pytest.fixture
def submit():
    def _submit(controller, draft=None):
        controller.request_new_inspection()
        return controller.submit_inspection(draft or _make_draft())
    return _submit
