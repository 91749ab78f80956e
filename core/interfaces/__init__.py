from core.interfaces.repositories import (
    ITeamRepository,
    IPlayerRepository,
    ILocationRepository,
    IGameRepository,
    IRegistrationRepository,
    IWaiverRepository,
    IAnnouncementRepository,
    IPushTokenRepository,
    ISportsInfoRepository,
    IFeedbackRepository,
    IAuthRepository,
)
from core.interfaces.messaging import INotificationSender

__all__ = [
    # Repositories
    "ITeamRepository",
    "IPlayerRepository",
    "ILocationRepository",
    "IGameRepository",
    "IRegistrationRepository",
    "IWaiverRepository",
    "IAnnouncementRepository",
    "IPushTokenRepository",
    "ISportsInfoRepository",
    "IFeedbackRepository",
    "IAuthRepository",
    # Messaging
    "INotificationSender",
]
