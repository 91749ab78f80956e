"""
Public API routes - league info, forms and device registration.
"""

import logging
from datetime import date

from aiohttp import web

from core.domain.models import (
    SportType, WaiverType, TargetAudience, AnnouncementType, AnnouncementPriority,
    SubstituteRegistrationCreate, WaiverSignatureData, ClientInfo,
    WebsiteFeedbackCreate, PushTokenCreate,
)
from core.domain.exceptions import FormValidationError
from core.services.registration_service import validate_step
from adapters.loader import Services
from adapters.api.middleware import FormRateLimiter, authenticate, error_json
from adapters.api.utils import json_ok, parse_uuid, parse_enum, parse_int, read_json

logger = logging.getLogger(__name__)


def _sport(request: web.Request) -> SportType:
    return parse_enum(SportType, request.match_info["sport"], "sport")


def setup_public_routes(app: web.Application, services: Services, limiter: FormRateLimiter):
    """Register public routes on the app."""

    async def health(request: web.Request) -> web.Response:
        return web.json_response({"status": "ok"})

    # === Content ===

    async def list_sports(request: web.Request) -> web.Response:
        return json_ok(await services.content.list_sports())

    async def get_sport(request: web.Request) -> web.Response:
        sport = await services.content.get_sport(request.match_info["name"])
        if not sport:
            return error_json("Sport not found", 404)
        return json_ok(sport)

    # === Teams ===

    async def list_teams(request: web.Request) -> web.Response:
        sport = parse_enum(SportType, request.query.get("sport"), "sport")
        teams = await services.league.list_teams(sport)
        records = await services.league.get_team_records([t.id for t in teams], sport)
        return json_ok([
            {**team.model_dump(mode="json"), "record": records[team.id].model_dump()}
            for team in teams
        ])

    async def get_team(request: web.Request) -> web.Response:
        team_id = parse_uuid(request.match_info["id"])
        team = await services.league.get_team(team_id)
        if not team:
            return error_json("Team not found", 404)
        record = await services.league.get_team_record(team_id)
        return json_ok({**team.model_dump(mode="json"), "record": record.model_dump()})

    # === Games ===

    async def list_games(request: web.Request) -> web.Response:
        sport = parse_enum(SportType, request.query.get("sport"), "sport")
        team = request.query.get("team")
        team_id = parse_uuid(team, "team") if team else None
        return json_ok(await services.league.list_games(sport=sport, team_id=team_id))

    async def upcoming_games(request: web.Request) -> web.Response:
        sport = parse_enum(SportType, request.query.get("sport"), "sport")
        limit = parse_int(request.query.get("limit"), "limit")
        return json_ok(await services.league.get_upcoming_games(sport=sport, limit=limit))

    async def get_game(request: web.Request) -> web.Response:
        game = await services.league.get_game(parse_uuid(request.match_info["id"]))
        if not game:
            return error_json("Game not found", 404)
        return json_ok(game)

    async def get_schedule(request: web.Request) -> web.Response:
        return json_ok(await services.league.get_schedule(_sport(request)))

    async def live_scores(request: web.Request) -> web.Response:
        return json_ok(await services.scores.get_live_games())

    async def list_locations(request: web.Request) -> web.Response:
        return json_ok(await services.league.list_locations())

    # === Announcements ===

    async def list_announcements(request: web.Request) -> web.Response:
        audience = parse_enum(TargetAudience, request.query.get("audience"), "audience")
        types = [
            parse_enum(AnnouncementType, value, "type")
            for value in request.query.getall("type", [])
        ]
        priorities = [
            parse_enum(AnnouncementPriority, value, "priority")
            for value in request.query.getall("priority", [])
        ]
        limit = parse_int(request.query.get("limit"), "limit")
        announcements = await services.announcements.get_active(
            audience=audience, types=types or None, priorities=priorities or None, limit=limit,
        )
        return json_ok(announcements)

    # === Registration forms ===

    async def validate_registration_step(request: web.Request) -> web.Response:
        body = await read_json(request)
        step = parse_int(str(body.get("step", "")), "step")
        if step not in (1, 2, 3, 4):
            raise FormValidationError({"step": "Step must be between 1 and 4"})
        errors = validate_step(body.get("draft") or {}, step)
        return web.json_response({"valid": not errors, "errors": errors})

    async def register_player(request: web.Request) -> web.Response:
        sport = _sport(request)
        limiter.enforce(request, "registration")
        result = await services.registrations.submit_player_registration(sport, await read_json(request))
        return json_ok(result, status=201 if result.success else 400)

    async def register_substitute(request: web.Request) -> web.Response:
        sport = _sport(request)
        limiter.enforce(request, "substitute")
        form = SubstituteRegistrationCreate(**await read_json(request))
        result = await services.registrations.submit_substitute_registration(sport, form)
        return json_ok(result, status=201 if result.success else 400)

    # === Waivers ===

    async def submit_waiver(request: web.Request) -> web.Response:
        limiter.enforce(request, "waiver")
        data = WaiverSignatureData(**await read_json(request))
        client_info = ClientInfo(
            ip_address=limiter.client_ip(request),
            user_agent=request.headers.get("User-Agent"),
        )
        result = await services.waivers.submit_waiver(data, client_info)
        return json_ok(result, status=201 if result.success else 400)

    async def waiver_status(request: web.Request) -> web.Response:
        name = request.query.get("name", "").strip()
        waiver_type = parse_enum(WaiverType, request.query.get("type"), "type")
        try:
            dob = date.fromisoformat(request.query.get("dob", ""))
        except ValueError:
            raise FormValidationError({"dob": "Date of birth must be YYYY-MM-DD"})
        if not name or not waiver_type:
            raise FormValidationError({"name": "Name and waiver type are required"})
        signed = await services.waivers.has_signed_waiver(name, dob, waiver_type)
        return web.json_response({"signed": signed})

    # === Feedback ===

    async def submit_feedback(request: web.Request) -> web.Response:
        limiter.enforce(request, "feedback")
        body = await read_json(request)
        body.setdefault("user_agent", request.headers.get("User-Agent", ""))
        feedback = await services.content.submit_feedback(WebsiteFeedbackCreate(**body))
        return json_ok(feedback, status=201)

    # === Push tokens ===

    async def register_push_token(request: web.Request) -> web.Response:
        user = await authenticate(request, services.auth)
        data = PushTokenCreate(**await read_json(request))
        token = await services.notifications.register_token(str(user.id), data)
        return json_ok(token, status=201)

    async def unregister_push_token(request: web.Request) -> web.Response:
        user = await authenticate(request, services.auth)
        count = await services.notifications.unregister_token(
            str(user.id), request.match_info["device_id"]
        )
        return web.json_response({"deactivated": count})

    app.router.add_get("/health", health)
    app.router.add_get("/api/sports", list_sports)
    app.router.add_get("/api/sports/{name}", get_sport)
    app.router.add_get("/api/teams", list_teams)
    app.router.add_get("/api/teams/{id}", get_team)
    app.router.add_get("/api/games", list_games)
    app.router.add_get("/api/games/upcoming", upcoming_games)
    app.router.add_get("/api/games/{id}", get_game)
    app.router.add_get("/api/schedule/{sport}", get_schedule)
    app.router.add_get("/api/scores/live", live_scores)
    app.router.add_get("/api/locations", list_locations)
    app.router.add_get("/api/announcements", list_announcements)
    app.router.add_post("/api/registrations/validate-step", validate_registration_step)
    app.router.add_post("/api/registrations/{sport}", register_player)
    app.router.add_post("/api/substitutes/{sport}", register_substitute)
    app.router.add_post("/api/waivers", submit_waiver)
    app.router.add_get("/api/waivers/status", waiver_status)
    app.router.add_post("/api/feedback", submit_feedback)
    app.router.add_post("/api/push-tokens", register_push_token)
    app.router.add_delete("/api/push-tokens/{device_id}", unregister_push_token)
