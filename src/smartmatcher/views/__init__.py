"""Views: list, detail and dashboard state plus notifications."""

from .cache import CONSULTANTS_KEY, JOBS_KEY, QueryCache
from .dashboard import DashboardStats, DashboardView, dashboard_for_role
from .job_details import JobDetailsView
from .listing import (
    ConsultantListView,
    JobListView,
    filter_consultants,
    filter_jobs,
)
from .notifications import Notifier, Toast, ToastVariant

__all__ = [
    "CONSULTANTS_KEY",
    "JOBS_KEY",
    "QueryCache",
    "DashboardStats",
    "DashboardView",
    "dashboard_for_role",
    "JobDetailsView",
    "ConsultantListView",
    "JobListView",
    "filter_consultants",
    "filter_jobs",
    "Notifier",
    "Toast",
    "ToastVariant",
]
