"""
Domain models - the core of business logic.
These models are transport-agnostic (work with the HTTP API, Telegram, scripts, etc.)
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Dict
from datetime import date, datetime
from uuid import UUID
from enum import Enum


# === ENUMS ===

class SportType(str, Enum):
    KICKBALL = "kickball"
    DODGEBALL = "dodgeball"


class GameStatus(str, Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    POSTPONED = "postponed"
    ARCHIVED = "archived"


class ShirtSize(str, Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"


class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class RegistrationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    WAITLIST = "waitlist"
    DECLINED = "declined"


class WaiverType(str, Enum):
    LIABILITY = "liability"
    PHOTO_RELEASE = "photo_release"


class PhotoPermission(str, Enum):
    GRANT = "grant"
    WITHHOLD = "withhold"


class AnnouncementPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"


class AnnouncementType(str, Enum):
    GENERAL = "general"
    GAME = "game"
    REGISTRATION = "registration"
    MAINTENANCE = "maintenance"
    EVENT = "event"


class TargetAudience(str, Enum):
    ALL = "all"
    PLAYERS = "players"
    TEAMS = "teams"
    KICKBALL = "kickball"
    DODGEBALL = "dodgeball"


class DevicePlatform(str, Enum):
    """Where a push token delivers to"""
    IOS = "ios"
    ANDROID = "android"
    WEB = "web"
    TELEGRAM = "telegram"


class FeedbackType(str, Enum):
    BUG = "bug"
    SUGGESTION = "suggestion"
    CONTENT = "content"
    OTHER = "other"


class FeedbackStatus(str, Enum):
    NEW = "new"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class FieldType(str, Enum):
    GRASS = "grass"
    TURF = "turf"
    INDOOR = "indoor"
    COURT = "court"


class ScoreSide(str, Enum):
    HOME = "home"
    AWAY = "away"


# === ROSTER ===

class Player(BaseModel):
    """Rostered player"""
    id: UUID
    name: str
    jersey_number: int = 0
    quote: str = ""
    photo_url: Optional[str] = None
    team_id: Optional[UUID] = None
    sport_type: SportType

    class Config:
        from_attributes = True


class PlayerCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    jersey_number: int = Field(default=0, ge=0, le=999)
    quote: str = ""
    team_id: UUID
    sport_type: SportType


class PlayerUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    jersey_number: Optional[int] = Field(default=None, ge=0, le=999)
    quote: Optional[str] = None
    team_id: Optional[UUID] = None
    sport_type: Optional[SportType] = None


class Team(BaseModel):
    """Team with its roster"""
    id: UUID
    name: str
    sport: SportType
    gradient: str = "blue"
    description: str = ""
    motto: str = ""
    founded: int = 2020
    wins: int = 0
    losses: int = 0
    captain_id: Optional[UUID] = None
    players: List[Player] = Field(default_factory=list)

    class Config:
        from_attributes = True


class TeamCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    sport: SportType
    gradient: str = "blue"
    description: str = ""
    motto: str = ""
    founded: int = Field(default=2020, ge=1900, le=2100)


class TeamUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    sport: Optional[SportType] = None
    gradient: Optional[str] = None
    description: Optional[str] = None
    motto: Optional[str] = None
    founded: Optional[int] = Field(default=None, ge=1900, le=2100)
    wins: Optional[int] = Field(default=None, ge=0)
    losses: Optional[int] = Field(default=None, ge=0)
    captain_id: Optional[UUID] = None


class TeamRecord(BaseModel):
    """Win/loss record computed from completed games"""
    wins: int = 0
    losses: int = 0
    win_percentage: int = 0
    total_games: int = 0


# === LOCATIONS ===

class Location(BaseModel):
    id: UUID
    name: str
    address: str
    city: str = ""
    state: str = ""
    zip_code: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    facilities: List[str] = Field(default_factory=list)
    field_type: FieldType = FieldType.GRASS
    capacity: Optional[int] = None
    parking: bool = False
    restrooms: bool = False
    water_fountains: bool = False
    concessions: bool = False

    class Config:
        from_attributes = True


class LocationCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    address: str = Field(min_length=1)
    city: str = ""
    state: str = ""
    zip_code: str = ""
    latitude: float = Field(default=0.0, ge=-90, le=90)
    longitude: float = Field(default=0.0, ge=-180, le=180)
    facilities: List[str] = Field(default_factory=list)
    field_type: FieldType = FieldType.GRASS
    capacity: Optional[int] = Field(default=None, ge=0)
    parking: bool = False
    restrooms: bool = False
    water_fountains: bool = False
    concessions: bool = False


class LocationUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    facilities: Optional[List[str]] = None
    field_type: Optional[FieldType] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    parking: Optional[bool] = None
    restrooms: Optional[bool] = None
    water_fountains: Optional[bool] = None
    concessions: Optional[bool] = None


# === GAMES ===

class Game(BaseModel):
    """Game row as stored"""
    id: UUID
    home_team_id: UUID
    away_team_id: UUID
    location_id: Optional[UUID] = None
    scheduled_at: datetime
    game_time: str = ""
    sport_type: SportType
    week_number: int = 1
    season: str = "Summer 2025"
    year: Optional[int] = None
    status: GameStatus = GameStatus.SCHEDULED
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    @property
    def has_scores(self) -> bool:
        return self.home_score is not None and self.away_score is not None


class GameCreate(BaseModel):
    home_team_id: UUID
    away_team_id: UUID
    location_id: UUID
    scheduled_at: datetime
    game_time: str = ""
    sport_type: SportType
    week_number: int = Field(default=1, ge=1)
    season: str = "Summer 2025"
    year: Optional[int] = None
    status: GameStatus = GameStatus.SCHEDULED
    home_score: Optional[int] = None
    away_score: Optional[int] = None


class GameUpdate(BaseModel):
    home_team_id: Optional[UUID] = None
    away_team_id: Optional[UUID] = None
    location_id: Optional[UUID] = None
    scheduled_at: Optional[datetime] = None
    game_time: Optional[str] = None
    sport_type: Optional[SportType] = None
    week_number: Optional[int] = Field(default=None, ge=1)
    season: Optional[str] = None
    year: Optional[int] = None
    status: Optional[GameStatus] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None


class GameDetail(BaseModel):
    """Game with resolved teams and location"""
    game: Game
    home_team: Team
    away_team: Team
    location: Location


class ScheduleWeek(BaseModel):
    week_number: int
    start_date: datetime
    end_date: datetime
    games: List[GameDetail] = Field(default_factory=list)


class Schedule(BaseModel):
    season: str
    sport_type: SportType
    weeks: List[ScheduleWeek] = Field(default_factory=list)
    total_weeks: int = 0


class ScoreChange(BaseModel):
    """Audit row for a score edit"""
    id: Optional[UUID] = None
    game_id: UUID
    admin_user_id: Optional[UUID] = None
    home_score: int
    away_score: int
    previous_home_score: Optional[int] = None
    previous_away_score: Optional[int] = None
    created_at: Optional[datetime] = None


class LeagueStats(BaseModel):
    total_teams: int = 0
    total_players: int = 0
    total_games: int = 0
    total_locations: int = 0
    upcoming_games: int = 0
    completed_games: int = 0


# === REGISTRATIONS ===

class PlayerRegistrationCreate(BaseModel):
    """Validated wizard output ready to be stored"""
    sport_type: SportType
    first_name: str
    last_name: str
    email: str
    phone: str
    shirt_size: ShirtSize = ShirtSize.M
    emergency_contact_name: str
    emergency_contact_phone: str
    experience_level: ExperienceLevel = ExperienceLevel.BEGINNER
    how_did_you_hear: str = ""
    dietary_restrictions: Optional[str] = None
    medical_conditions: Optional[str] = None
    agree_to_terms: bool = False
    agree_to_email_updates: bool = True


class PlayerRegistration(PlayerRegistrationCreate):
    id: UUID
    status: RegistrationStatus = RegistrationStatus.PENDING
    notes: Optional[str] = None
    registration_date: Optional[datetime] = None

    class Config:
        from_attributes = True


class SubstituteRegistrationCreate(BaseModel):
    """Substitute pool sign-up form"""
    first_name: str = ""
    last_name: str = ""
    preferred_pronouns: str = ""
    phone: str = ""
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    agree_to_liability_waiver: bool = False
    agree_to_photo_release: bool = False
    agree_to_text_updates: bool = False
    confirm_age_18_plus: bool = False


class SubstituteRegistration(BaseModel):
    id: UUID
    sport_type: SportType
    first_name: str
    last_name: str
    preferred_pronouns: str = ""
    age: int = 18
    phone: str
    emergency_contact_name: str = ""
    emergency_contact_phone: str = ""
    notes: Optional[str] = None
    agree_to_terms: bool = True
    agree_to_text_updates: bool = False
    registration_date: Optional[datetime] = None


class RegistrationSummary(BaseModel):
    """Counts per sport and status"""
    sport_type: SportType
    total: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)


class RegistrationResult(BaseModel):
    success: bool
    message: str
    id: Optional[UUID] = None
    errors: Dict[str, str] = Field(default_factory=dict)


# === WAIVERS ===

class WaiverSignatureData(BaseModel):
    """What the participant filled in"""
    waiver_type: WaiverType
    participant_name: str = ""
    participant_dob: Optional[date] = None
    digital_signature: str = ""
    acknowledge_terms: bool = False
    voluntary_signature: bool = False
    legal_age_certification: bool = False
    photo_permission: Optional[PhotoPermission] = None

    @field_validator("waiver_type", mode="before")
    @classmethod
    def accept_short_photo_type(cls, v):
        # older clients send "photo"
        return "photo_release" if v == "photo" else v

    @field_validator("participant_dob", "photo_permission", mode="before")
    @classmethod
    def empty_as_missing(cls, v):
        return None if v == "" else v


class WaiverSignature(BaseModel):
    """Stored signature record"""
    id: UUID
    waiver_type: WaiverType
    waiver_version: str = "1.0"
    participant_name: str
    participant_dob: date
    digital_signature: str
    acknowledge_terms: bool
    voluntary_signature: bool
    legal_age_certification: bool
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    signature_timestamp: Optional[datetime] = None

    class Config:
        from_attributes = True


class WaiverSubmissionResult(BaseModel):
    success: bool
    message: str
    id: Optional[UUID] = None
    confirmation_number: Optional[str] = None
    errors: Dict[str, str] = Field(default_factory=dict)


class ClientInfo(BaseModel):
    """Request metadata kept with a signature for legal verification"""
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


# === ANNOUNCEMENTS ===

class Announcement(BaseModel):
    id: UUID
    title: str
    content: str
    priority: AnnouncementPriority = AnnouncementPriority.NORMAL
    type: AnnouncementType = AnnouncementType.GENERAL
    target_audience: TargetAudience = TargetAudience.ALL
    is_active: bool = True
    expires_at: Optional[datetime] = None
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class AnnouncementCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1, max_length=5000)
    priority: AnnouncementPriority = AnnouncementPriority.NORMAL
    type: AnnouncementType = AnnouncementType.GENERAL
    target_audience: TargetAudience = TargetAudience.ALL
    expires_at: Optional[datetime] = None


class AnnouncementUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1, max_length=5000)
    priority: Optional[AnnouncementPriority] = None
    type: Optional[AnnouncementType] = None
    target_audience: Optional[TargetAudience] = None
    is_active: Optional[bool] = None
    expires_at: Optional[datetime] = None


# === PUSH NOTIFICATIONS ===

class PushTokenCreate(BaseModel):
    push_token: str = Field(min_length=1)
    platform: DevicePlatform
    device_id: str = "unknown"
    app_version: Optional[str] = None


class PushToken(BaseModel):
    id: UUID
    user_id: str
    push_token: str
    platform: DevicePlatform
    device_id: str = "unknown"
    app_version: Optional[str] = None
    is_active: bool = True


class PushMessage(BaseModel):
    """Platform-neutral notification payload"""
    title: str
    body: str
    priority: AnnouncementPriority = AnnouncementPriority.NORMAL
    data: Dict[str, str] = Field(default_factory=dict)


class NotificationResult(BaseModel):
    success: bool = True
    message: str = ""
    tokens_sent: int = 0
    tokens_failed: int = 0


# === PUBLIC CONTENT ===

class SportsInfo(BaseModel):
    id: UUID
    name: str
    title: Optional[str] = None
    description: str = ""
    gradient: str = "blue"
    participants: int = 0
    next_game: Optional[date] = None
    features: List[str] = Field(default_factory=list)
    total_teams: int = 0
    roster_path: Optional[str] = None
    coming_soon: bool = False
    is_active: bool = True
    season: str = "Spring"
    year: int = 2025


class SportsInfoUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    gradient: Optional[str] = None
    participants: Optional[int] = Field(default=None, ge=0)
    next_game: Optional[date] = None
    features: Optional[List[str]] = None
    total_teams: Optional[int] = Field(default=None, ge=0)
    roster_path: Optional[str] = None
    coming_soon: Optional[bool] = None
    is_active: Optional[bool] = None


class WebsiteFeedbackCreate(BaseModel):
    url: str = Field(default="", max_length=2000)
    user_agent: str = Field(default="", max_length=1000)
    issue_description: str = Field(min_length=1, max_length=5000)
    feedback_type: FeedbackType = FeedbackType.OTHER


class WebsiteFeedback(BaseModel):
    id: UUID
    url: str = ""
    user_agent: str = ""
    issue_description: str
    feedback_type: FeedbackType = FeedbackType.OTHER
    status: FeedbackStatus = FeedbackStatus.NEW
    priority: str = "medium"
    admin_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None


# === AUTH ===

class AdminUser(BaseModel):
    """Authenticated user resolved from a Supabase access token"""
    id: UUID
    email: Optional[str] = None
    is_admin: bool = False
