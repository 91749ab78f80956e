"""
Service wiring shared by every surface (HTTP API, Telegram bot, scripts).
"""

from dataclasses import dataclass
from typing import Optional, List

from supabase import Client

from config.settings import settings
from config.features import features

# Infrastructure
from infrastructure.database import (
    SupabaseTeamRepository,
    SupabasePlayerRepository,
    SupabaseLocationRepository,
    SupabaseGameRepository,
    SupabaseRegistrationRepository,
    SupabaseWaiverRepository,
    SupabaseAnnouncementRepository,
    SupabasePushTokenRepository,
    SupabaseSportsInfoRepository,
    SupabaseFeedbackRepository,
    SupabaseAuthRepository,
)
from infrastructure.notifications import FCMSender

# Core services
from core.interfaces.messaging import INotificationSender
from core.interfaces.repositories import IAuthRepository
from core.services import (
    RegistrationService,
    WaiverService,
    LeagueService,
    ScoreService,
    NotificationService,
    AnnouncementService,
    ContentService,
    SchedulerService,
)


@dataclass
class Services:
    """Everything an adapter needs to serve requests"""
    league: LeagueService
    scores: ScoreService
    registrations: RegistrationService
    waivers: WaiverService
    announcements: AnnouncementService
    notifications: NotificationService
    content: ContentService
    auth: IAuthRepository


def build_services(client: Optional[Client] = None,
                   senders: Optional[List[INotificationSender]] = None) -> Services:
    """Create repositories and services over one Supabase client"""

    # === REPOSITORIES ===
    team_repo = SupabaseTeamRepository(client)
    player_repo = SupabasePlayerRepository(client)
    location_repo = SupabaseLocationRepository(client)
    game_repo = SupabaseGameRepository(client)
    registration_repo = SupabaseRegistrationRepository(client)
    waiver_repo = SupabaseWaiverRepository(client)
    announcement_repo = SupabaseAnnouncementRepository(client)
    push_token_repo = SupabasePushTokenRepository(client)
    sports_info_repo = SupabaseSportsInfoRepository(client)
    feedback_repo = SupabaseFeedbackRepository(client)
    auth_repo = SupabaseAuthRepository(client)

    # === NOTIFICATION SENDERS ===
    if senders is None:
        senders = []
        if features.PUSH_ENABLED:
            senders.append(FCMSender(settings.fcm_server_key, settings.fcm_endpoint))

    # === BUSINESS SERVICES ===
    league = LeagueService(
        team_repo=team_repo,
        player_repo=player_repo,
        location_repo=location_repo,
        game_repo=game_repo,
    )
    notifications = NotificationService(push_token_repo=push_token_repo, senders=senders)

    return Services(
        league=league,
        scores=ScoreService(game_repo=game_repo, league_service=league),
        registrations=RegistrationService(registration_repo=registration_repo),
        waivers=WaiverService(waiver_repo=waiver_repo),
        announcements=AnnouncementService(
            announcement_repo=announcement_repo,
            notification_service=notifications if features.NOTIFY_ON_ANNOUNCEMENT else None,
        ),
        notifications=notifications,
        content=ContentService(
            sports_info_repo=sports_info_repo,
            feedback_repo=feedback_repo,
            cache_seconds=features.CONTENT_CACHE_SECONDS,
        ),
        auth=auth_repo,
    )


def build_scheduler(services: Services) -> SchedulerService:
    return SchedulerService(
        league_service=services.league,
        content_service=services.content,
        announcement_service=services.announcements,
        interval_seconds=features.SCHEDULER_INTERVAL_SECONDS,
    )
