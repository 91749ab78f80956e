"""
Admin API routes - league management dashboard.
Auth is enforced by admin_auth_middleware for everything under /api/admin.
"""

import logging

from aiohttp import web

from core.domain.models import (
    SportType, RegistrationStatus, WaiverType, FeedbackStatus, ScoreSide,
    TeamCreate, TeamUpdate, PlayerCreate, PlayerUpdate,
    LocationCreate, LocationUpdate, GameCreate, GameUpdate,
    AnnouncementCreate, AnnouncementUpdate, SportsInfoUpdate,
)
from core.domain.exceptions import FormValidationError
from adapters.loader import Services
from adapters.api.middleware import error_json
from adapters.api.utils import json_ok, parse_uuid, parse_enum, parse_int, read_json

logger = logging.getLogger(__name__)


def _deleted(ok: bool, entity: str) -> web.Response:
    if not ok:
        return error_json(f"{entity} not found", 404)
    return web.json_response({"deleted": True})


def setup_admin_routes(app: web.Application, services: Services):
    """Register admin routes on the app."""
    league = services.league

    # === Teams ===

    async def create_team(request: web.Request) -> web.Response:
        team = await league.create_team(TeamCreate(**await read_json(request)))
        return json_ok(team, status=201)

    async def update_team(request: web.Request) -> web.Response:
        data = TeamUpdate(**await read_json(request))
        return json_ok(await league.update_team(parse_uuid(request.match_info["id"]), data))

    async def delete_team(request: web.Request) -> web.Response:
        return _deleted(await league.delete_team(parse_uuid(request.match_info["id"])), "Team")

    # === Players ===

    async def list_players(request: web.Request) -> web.Response:
        team = request.query.get("team")
        if team:
            return json_ok(await league.list_team_players(parse_uuid(team, "team")))
        sport = parse_enum(SportType, request.query.get("sport"), "sport")
        return json_ok(await league.list_players(sport))

    async def create_player(request: web.Request) -> web.Response:
        player = await league.create_player(PlayerCreate(**await read_json(request)))
        return json_ok(player, status=201)

    async def update_player(request: web.Request) -> web.Response:
        data = PlayerUpdate(**await read_json(request))
        return json_ok(await league.update_player(parse_uuid(request.match_info["id"]), data))

    async def delete_player(request: web.Request) -> web.Response:
        return _deleted(await league.delete_player(parse_uuid(request.match_info["id"])), "Player")

    # === Locations ===

    async def create_location(request: web.Request) -> web.Response:
        location = await league.create_location(LocationCreate(**await read_json(request)))
        return json_ok(location, status=201)

    async def update_location(request: web.Request) -> web.Response:
        data = LocationUpdate(**await read_json(request))
        return json_ok(await league.update_location(parse_uuid(request.match_info["id"]), data))

    async def delete_location(request: web.Request) -> web.Response:
        return _deleted(await league.delete_location(parse_uuid(request.match_info["id"])), "Location")

    # === Games ===

    async def create_game(request: web.Request) -> web.Response:
        game = await league.create_game(GameCreate(**await read_json(request)))
        return json_ok(game, status=201)

    async def update_game(request: web.Request) -> web.Response:
        data = GameUpdate(**await read_json(request))
        return json_ok(await league.update_game(parse_uuid(request.match_info["id"]), data))

    async def delete_game(request: web.Request) -> web.Response:
        return _deleted(await league.delete_game(parse_uuid(request.match_info["id"])), "Game")

    # === Scores ===

    async def set_score(request: web.Request) -> web.Response:
        body = await read_json(request)
        home = parse_int(str(body.get("home_score", "")), "home_score")
        away = parse_int(str(body.get("away_score", "")), "away_score")
        if home is None or away is None:
            raise FormValidationError({"home_score": "Both scores are required"})
        game = await services.scores.update_score(
            parse_uuid(request.match_info["id"]), home, away, request["user"].id
        )
        return json_ok(game)

    def adjust_score(increment: bool):
        async def handler(request: web.Request) -> web.Response:
            body = await read_json(request)
            side = parse_enum(ScoreSide, body.get("side"), "side")
            if not side:
                raise FormValidationError({"side": "Side must be home or away"})
            amount = parse_int(str(body.get("amount", 1)), "amount")
            method = services.scores.increment_score if increment else services.scores.decrement_score
            game = await method(parse_uuid(request.match_info["id"]), side, amount, request["user"].id)
            return json_ok(game)
        return handler

    async def start_game(request: web.Request) -> web.Response:
        return json_ok(await services.scores.start_game(parse_uuid(request.match_info["id"])))

    async def complete_game(request: web.Request) -> web.Response:
        return json_ok(await services.scores.complete_game(parse_uuid(request.match_info["id"])))

    async def score_history(request: web.Request) -> web.Response:
        return json_ok(await services.scores.get_score_history(parse_uuid(request.match_info["id"])))

    # === Registrations ===

    async def list_registrations(request: web.Request) -> web.Response:
        sport = parse_enum(SportType, request.query.get("sport"), "sport")
        status = parse_enum(RegistrationStatus, request.query.get("status"), "status")
        return json_ok(await services.registrations.list_registrations(sport, status))

    async def update_registration(request: web.Request) -> web.Response:
        body = await read_json(request)
        status = parse_enum(RegistrationStatus, body.get("status"), "status")
        if not status:
            raise FormValidationError({"status": "Status is required"})
        registration = await services.registrations.update_registration_status(
            parse_uuid(request.match_info["id"]), status, body.get("notes"),
        )
        if not registration:
            return error_json("Registration not found", 404)
        return json_ok(registration)

    async def registration_summary(request: web.Request) -> web.Response:
        return json_ok(await services.registrations.get_summary())

    async def list_substitutes(request: web.Request) -> web.Response:
        sport = parse_enum(SportType, request.query.get("sport"), "sport")
        return json_ok(await services.registrations.list_substitutes(sport))

    # === Waivers ===

    async def list_waivers(request: web.Request) -> web.Response:
        waiver_type = parse_enum(WaiverType, request.query.get("type"), "type")
        return json_ok(await services.waivers.list_waivers(waiver_type))

    # === Announcements ===

    async def list_announcements(request: web.Request) -> web.Response:
        return json_ok(await services.announcements.list_all())

    async def create_announcement(request: web.Request) -> web.Response:
        body = await read_json(request)
        notify = bool(body.pop("notify", False))
        announcement, result = await services.announcements.create(
            AnnouncementCreate(**body), created_by=request["user"].id, notify=notify,
        )
        return json_ok({"announcement": announcement, "notification": result}, status=201)

    async def update_announcement(request: web.Request) -> web.Response:
        data = AnnouncementUpdate(**await read_json(request))
        return json_ok(await services.announcements.update(parse_uuid(request.match_info["id"]), data))

    async def deactivate_announcement(request: web.Request) -> web.Response:
        return json_ok(await services.announcements.deactivate(parse_uuid(request.match_info["id"])))

    async def delete_announcement(request: web.Request) -> web.Response:
        ok = await services.announcements.delete(parse_uuid(request.match_info["id"]))
        return _deleted(ok, "Announcement")

    # === Feedback ===

    async def list_feedback(request: web.Request) -> web.Response:
        status = parse_enum(FeedbackStatus, request.query.get("status"), "status")
        return json_ok(await services.content.list_feedback(status))

    async def feedback_counts(request: web.Request) -> web.Response:
        return web.json_response(await services.content.feedback_counts())

    async def update_feedback(request: web.Request) -> web.Response:
        body = await read_json(request)
        feedback_id = parse_uuid(request.match_info["id"])
        status = parse_enum(FeedbackStatus, body.get("status"), "status")
        notes = body.get("admin_notes")
        if status == FeedbackStatus.RESOLVED:
            feedback = await services.content.resolve_feedback(feedback_id, notes)
        elif status == FeedbackStatus.DISMISSED:
            feedback = await services.content.dismiss_feedback(feedback_id, notes)
        elif status == FeedbackStatus.IN_PROGRESS:
            feedback = await services.content.mark_in_progress(feedback_id)
        else:
            raise FormValidationError({"status": "Status must be in_progress, resolved or dismissed"})
        return json_ok(feedback)

    async def delete_feedback(request: web.Request) -> web.Response:
        ok = await services.content.delete_feedback(parse_uuid(request.match_info["id"]))
        return _deleted(ok, "Feedback")

    # === Sports info & stats ===

    async def update_sport(request: web.Request) -> web.Response:
        data = SportsInfoUpdate(**await read_json(request))
        return json_ok(await services.content.update_sport(request.match_info["name"], data))

    async def stats(request: web.Request) -> web.Response:
        return json_ok(await league.get_stats())

    prefix = "/api/admin"
    app.router.add_post(f"{prefix}/teams", create_team)
    app.router.add_put(f"{prefix}/teams/{{id}}", update_team)
    app.router.add_delete(f"{prefix}/teams/{{id}}", delete_team)
    app.router.add_get(f"{prefix}/players", list_players)
    app.router.add_post(f"{prefix}/players", create_player)
    app.router.add_put(f"{prefix}/players/{{id}}", update_player)
    app.router.add_delete(f"{prefix}/players/{{id}}", delete_player)
    app.router.add_post(f"{prefix}/locations", create_location)
    app.router.add_put(f"{prefix}/locations/{{id}}", update_location)
    app.router.add_delete(f"{prefix}/locations/{{id}}", delete_location)
    app.router.add_post(f"{prefix}/games", create_game)
    app.router.add_put(f"{prefix}/games/{{id}}", update_game)
    app.router.add_delete(f"{prefix}/games/{{id}}", delete_game)
    app.router.add_put(f"{prefix}/games/{{id}}/score", set_score)
    app.router.add_post(f"{prefix}/games/{{id}}/score/increment", adjust_score(increment=True))
    app.router.add_post(f"{prefix}/games/{{id}}/score/decrement", adjust_score(increment=False))
    app.router.add_post(f"{prefix}/games/{{id}}/start", start_game)
    app.router.add_post(f"{prefix}/games/{{id}}/complete", complete_game)
    app.router.add_get(f"{prefix}/games/{{id}}/history", score_history)
    app.router.add_get(f"{prefix}/registrations", list_registrations)
    app.router.add_get(f"{prefix}/registrations/summary", registration_summary)
    app.router.add_patch(f"{prefix}/registrations/{{id}}", update_registration)
    app.router.add_get(f"{prefix}/substitutes", list_substitutes)
    app.router.add_get(f"{prefix}/waivers", list_waivers)
    app.router.add_get(f"{prefix}/announcements", list_announcements)
    app.router.add_post(f"{prefix}/announcements", create_announcement)
    app.router.add_put(f"{prefix}/announcements/{{id}}", update_announcement)
    app.router.add_post(f"{prefix}/announcements/{{id}}/deactivate", deactivate_announcement)
    app.router.add_delete(f"{prefix}/announcements/{{id}}", delete_announcement)
    app.router.add_get(f"{prefix}/feedback", list_feedback)
    app.router.add_get(f"{prefix}/feedback/counts", feedback_counts)
    app.router.add_patch(f"{prefix}/feedback/{{id}}", update_feedback)
    app.router.add_delete(f"{prefix}/feedback/{{id}}", delete_feedback)
    app.router.add_put(f"{prefix}/sports/{{name}}", update_sport)
    app.router.add_get(f"{prefix}/stats", stats)
