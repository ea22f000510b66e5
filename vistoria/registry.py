# vistoria/registry.py
import logging
from datetime import datetime
from typing import Dict, Iterator, Optional

from vistoria.models import CompanyInspection

logger = logging.getLogger(__name__)


class CompanyInspectionRegistry:
    """First-inspection time per company code, kept for the whole session."""

    def __init__(self):
        # dicts keep insertion order, so iteration is first-seen order
        self._records: Dict[str, CompanyInspection] = {}

    def resolve_start_time(self, company_code: str, now: datetime) -> datetime:
        """
        Return the start time already stored for ``company_code``; on the
        company's first inspection store ``now`` and return it.
        """
        existing = self._records.get(company_code)
        if existing is not None:
            return existing.start_time
        self._records[company_code] = CompanyInspection(company=company_code, start_time=now)
        logger.info("Company %s first inspected at %s", company_code, now.isoformat())
        return now

    def get(self, company_code: str) -> Optional[CompanyInspection]:
        return self._records.get(company_code)

    def __contains__(self, company_code) -> bool:
        return company_code in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CompanyInspection]:
        return iter(list(self._records.values()))
