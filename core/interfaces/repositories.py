"""
Repository interfaces - abstractions for data access.
This allows swapping implementations (Supabase -> PostgreSQL -> in-memory, etc.)
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Optional, List
from uuid import UUID
from core.domain.models import (
    SportType, GameStatus, RegistrationStatus, WaiverType, FeedbackStatus,
    DevicePlatform, AdminUser,
    Team, TeamCreate, Player, PlayerCreate,
    Location, LocationCreate,
    Game, GameCreate, ScoreChange,
    PlayerRegistration, SubstituteRegistration,
    WaiverSignature,
    Announcement, AnnouncementCreate,
    PushToken,
    SportsInfo,
    WebsiteFeedback, WebsiteFeedbackCreate,
)


class ITeamRepository(ABC):
    """Interface for team data access"""

    @abstractmethod
    async def list(self, sport: Optional[SportType] = None) -> List[Team]:
        """Get teams, optionally for one sport, ordered by name"""
        pass

    @abstractmethod
    async def get_by_id(self, team_id: UUID) -> Optional[Team]:
        pass

    @abstractmethod
    async def create(self, team_data: TeamCreate) -> Team:
        pass

    @abstractmethod
    async def update(self, team_id: UUID, data: dict) -> Optional[Team]:
        pass

    @abstractmethod
    async def delete(self, team_id: UUID) -> bool:
        pass


class IPlayerRepository(ABC):
    """Interface for player data access"""

    @abstractmethod
    async def list(self, sport: Optional[SportType] = None) -> List[Player]:
        pass

    @abstractmethod
    async def get_by_id(self, player_id: UUID) -> Optional[Player]:
        pass

    @abstractmethod
    async def list_by_team(self, team_id: UUID) -> List[Player]:
        """Roster ordered by jersey number"""
        pass

    @abstractmethod
    async def create(self, player_data: PlayerCreate) -> Player:
        pass

    @abstractmethod
    async def update(self, player_id: UUID, data: dict) -> Optional[Player]:
        pass

    @abstractmethod
    async def delete(self, player_id: UUID) -> bool:
        pass

    @abstractmethod
    async def delete_by_team(self, team_id: UUID) -> int:
        """Remove a whole roster. Returns number of deleted players"""
        pass


class ILocationRepository(ABC):
    """Interface for field/venue data access"""

    @abstractmethod
    async def list(self) -> List[Location]:
        pass

    @abstractmethod
    async def get_by_id(self, location_id: UUID) -> Optional[Location]:
        pass

    @abstractmethod
    async def create(self, location_data: LocationCreate) -> Location:
        pass

    @abstractmethod
    async def update(self, location_id: UUID, data: dict) -> Optional[Location]:
        pass

    @abstractmethod
    async def delete(self, location_id: UUID) -> bool:
        pass


class IGameRepository(ABC):
    """Interface for game and score data access"""

    @abstractmethod
    async def list(
        self,
        sport: Optional[SportType] = None,
        team_id: Optional[UUID] = None,
        status: Optional[GameStatus] = None,
    ) -> List[Game]:
        """Games ordered by scheduled_at ascending"""
        pass

    @abstractmethod
    async def get_by_id(self, game_id: UUID) -> Optional[Game]:
        pass

    @abstractmethod
    async def get_upcoming(self, now: datetime, sport: Optional[SportType] = None,
                           limit: Optional[int] = None) -> List[Game]:
        """Scheduled games after `now`, soonest first"""
        pass

    @abstractmethod
    async def create(self, game_data: GameCreate) -> Game:
        pass

    @abstractmethod
    async def update(self, game_id: UUID, data: dict) -> Optional[Game]:
        pass

    @abstractmethod
    async def delete(self, game_id: UUID) -> bool:
        pass

    @abstractmethod
    async def record_score_change(self, change: ScoreChange) -> ScoreChange:
        pass

    @abstractmethod
    async def get_score_changes(self, game_id: UUID) -> List[ScoreChange]:
        """Audit rows, newest first"""
        pass


class IRegistrationRepository(ABC):
    """Interface for player and substitute sign-ups"""

    @abstractmethod
    async def create_player_registration(self, data: dict) -> PlayerRegistration:
        pass

    @abstractmethod
    async def list_player_registrations(
        self,
        sport: Optional[SportType] = None,
        status: Optional[RegistrationStatus] = None,
    ) -> List[PlayerRegistration]:
        """Newest first"""
        pass

    @abstractmethod
    async def update_player_registration(self, registration_id: UUID,
                                         data: dict) -> Optional[PlayerRegistration]:
        pass

    @abstractmethod
    async def create_substitute_registration(self, data: dict) -> SubstituteRegistration:
        pass

    @abstractmethod
    async def list_substitute_registrations(
        self, sport: Optional[SportType] = None
    ) -> List[SubstituteRegistration]:
        pass


class IWaiverRepository(ABC):
    """Interface for waiver signature records"""

    @abstractmethod
    async def find_existing(self, participant_name: str, participant_dob: date,
                            waiver_type: WaiverType) -> Optional[WaiverSignature]:
        pass

    @abstractmethod
    async def get_by_id(self, waiver_id: UUID) -> Optional[WaiverSignature]:
        pass

    @abstractmethod
    async def create(self, data: dict) -> WaiverSignature:
        pass

    @abstractmethod
    async def update(self, waiver_id: UUID, data: dict) -> Optional[WaiverSignature]:
        pass

    @abstractmethod
    async def list_for_participant(self, participant_name: str,
                                   participant_dob: date) -> List[WaiverSignature]:
        """Newest first"""
        pass

    @abstractmethod
    async def list(self, waiver_type: Optional[WaiverType] = None) -> List[WaiverSignature]:
        pass


class IAnnouncementRepository(ABC):
    """Interface for league announcements"""

    @abstractmethod
    async def list_active(self, now: datetime, audiences: List[str]) -> List[Announcement]:
        """Active, unexpired announcements for the given audiences"""
        pass

    @abstractmethod
    async def list_all(self) -> List[Announcement]:
        pass

    @abstractmethod
    async def get_by_id(self, announcement_id: UUID) -> Optional[Announcement]:
        pass

    @abstractmethod
    async def create(self, data: AnnouncementCreate,
                     created_by: Optional[UUID] = None) -> Announcement:
        pass

    @abstractmethod
    async def update(self, announcement_id: UUID, data: dict) -> Optional[Announcement]:
        pass

    @abstractmethod
    async def delete(self, announcement_id: UUID) -> bool:
        pass

    @abstractmethod
    async def deactivate_expired(self, now: datetime) -> int:
        """Flip is_active off for expired rows. Returns count"""
        pass


class IPushTokenRepository(ABC):
    """Interface for device push tokens"""

    @abstractmethod
    async def find_by_device(self, user_id: str, device_id: str) -> Optional[PushToken]:
        pass

    @abstractmethod
    async def set_active(self, token_id: UUID, is_active: bool) -> Optional[PushToken]:
        pass

    @abstractmethod
    async def upsert(self, data: dict) -> PushToken:
        """Insert or replace on (user_id, device_id)"""
        pass

    @abstractmethod
    async def deactivate(self, user_id: str, device_id: Optional[str] = None) -> int:
        pass

    @abstractmethod
    async def list_active(self, platforms: Optional[List[DevicePlatform]] = None) -> List[PushToken]:
        pass


class ISportsInfoRepository(ABC):
    """Interface for sports_info content rows"""

    @abstractmethod
    async def list_active(self) -> List[SportsInfo]:
        pass

    @abstractmethod
    async def get_by_name(self, name: str) -> Optional[SportsInfo]:
        pass

    @abstractmethod
    async def update(self, name: str, data: dict) -> Optional[SportsInfo]:
        pass


class IFeedbackRepository(ABC):
    """Interface for website feedback reports"""

    @abstractmethod
    async def create(self, data: WebsiteFeedbackCreate) -> WebsiteFeedback:
        pass

    @abstractmethod
    async def list(self, status: Optional[FeedbackStatus] = None) -> List[WebsiteFeedback]:
        """Newest first"""
        pass

    @abstractmethod
    async def update(self, feedback_id: UUID, data: dict) -> Optional[WebsiteFeedback]:
        pass

    @abstractmethod
    async def delete(self, feedback_id: UUID) -> bool:
        pass


class IAuthRepository(ABC):
    """Resolves access tokens issued by the hosted auth service"""

    @abstractmethod
    async def get_user(self, access_token: str) -> Optional[AdminUser]:
        pass
