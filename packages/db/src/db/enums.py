# This project was developed with assistance from AI tools.
"""
Domain enums for the recruiting pipeline.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class ApplicationStage(str, enum.Enum):
    DRAFT = "draft"
    RECRUITER_PROPOSED = "recruiter_proposed"
    AI_REVIEW = "ai_review"
    SCREEN = "screen"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    INTERVIEWING = "interviewing"
    OFFER_EXTENDED = "offer_extended"
    PLACED = "placed"
    DECLINED = "declined"
    WITHDRAWN = "withdrawn"
    EXPIRED = "expired"

    @classmethod
    def terminal_stages(cls) -> frozenset["ApplicationStage"]:
        """Stages where an application is no longer active."""
        return frozenset({cls.PLACED, cls.DECLINED, cls.WITHDRAWN, cls.EXPIRED})

    @classmethod
    def response_transitions(
        cls,
    ) -> dict["ApplicationStage", tuple["ApplicationStage", "ApplicationStage"]]:
        """(accept, decline) targets for every stage that awaits a response."""
        return {
            cls.DRAFT: (cls.SUBMITTED, cls.WITHDRAWN),
            cls.RECRUITER_PROPOSED: (cls.AI_REVIEW, cls.DECLINED),
            cls.AI_REVIEW: (cls.SUBMITTED, cls.DECLINED),
            cls.SCREEN: (cls.SUBMITTED, cls.DECLINED),
            cls.SUBMITTED: (cls.UNDER_REVIEW, cls.DECLINED),
            cls.UNDER_REVIEW: (cls.INTERVIEWING, cls.DECLINED),
            cls.INTERVIEWING: (cls.OFFER_EXTENDED, cls.DECLINED),
            cls.OFFER_EXTENDED: (cls.PLACED, cls.DECLINED),
        }


class UserRole(str, enum.Enum):
    ADMIN = "admin"
    CANDIDATE = "candidate"
    RECRUITER = "recruiter"
    COMPANY = "company"
