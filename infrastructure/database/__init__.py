from infrastructure.database.team_repository import SupabaseTeamRepository, SupabasePlayerRepository
from infrastructure.database.location_repository import SupabaseLocationRepository
from infrastructure.database.game_repository import SupabaseGameRepository
from infrastructure.database.registration_repository import SupabaseRegistrationRepository
from infrastructure.database.waiver_repository import SupabaseWaiverRepository
from infrastructure.database.announcement_repository import SupabaseAnnouncementRepository
from infrastructure.database.push_token_repository import SupabasePushTokenRepository
from infrastructure.database.content_repository import (
    SupabaseSportsInfoRepository,
    SupabaseFeedbackRepository,
)
from infrastructure.database.auth_repository import SupabaseAuthRepository

__all__ = [
    "SupabaseTeamRepository",
    "SupabasePlayerRepository",
    "SupabaseLocationRepository",
    "SupabaseGameRepository",
    "SupabaseRegistrationRepository",
    "SupabaseWaiverRepository",
    "SupabaseAnnouncementRepository",
    "SupabasePushTokenRepository",
    "SupabaseSportsInfoRepository",
    "SupabaseFeedbackRepository",
    "SupabaseAuthRepository",
]
