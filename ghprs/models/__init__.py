"""Data models for repositories, pull requests and pages (Pydantic)."""

from ghprs.models.page import Page
from ghprs.models.pr import PR
from ghprs.models.record import AnnotatedPR, AnnotatedRecord
from ghprs.models.repository import UNKNOWN_LANGUAGE, Repository

__all__ = ["AnnotatedPR", "AnnotatedRecord", "PR", "Page", "Repository", "UNKNOWN_LANGUAGE"]
