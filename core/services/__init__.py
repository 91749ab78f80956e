from core.services.registration_service import (
    RegistrationService,
    RegistrationWizard,
    validate_step,
)
from core.services.waiver_service import WaiverService, validate_waiver
from core.services.league_service import LeagueService
from core.services.score_service import ScoreService
from core.services.notification_service import NotificationService
from core.services.announcement_service import AnnouncementService
from core.services.content_service import ContentService
from core.services.scheduler_service import SchedulerService

__all__ = [
    "RegistrationService",
    "RegistrationWizard",
    "validate_step",
    "WaiverService",
    "validate_waiver",
    "LeagueService",
    "ScoreService",
    "NotificationService",
    "AnnouncementService",
    "ContentService",
    "SchedulerService",
]
