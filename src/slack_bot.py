# src/slack_bot.py
from __future__ import annotations

import os

from slack_bolt import App
from slack_bolt.adapter.socket_mode import SocketModeHandler

from availability import availability_by_teacher, teachers_freeing_in_month
from command_parse import parse_day_arg, parse_month_arg, parse_suggest_args
from csv_loader import load_rosters
from indexes import index_teachers_by_id
from settings import load_settings, local_today
from slack_blocks import (
    availability_blocks,
    error_blocks,
    freeing_blocks,
    suggestion_blocks,
)
from suggestions import suggest

SETTINGS = load_settings()

TEACHERS, BATCHES = load_rosters(SETTINGS.assets_dir, SETTINGS.default_max_concurrent)
TEACHERS_BY_ID = index_teachers_by_id(TEACHERS)

app = App(token=os.environ["SLACK_BOT_TOKEN"])


# ----------------------------
# Small helpers
# ----------------------------
def respond_error(respond, code: str) -> None:
    respond(response_type="ephemeral", text=code, blocks=error_blocks(code))


# ----------------------------
# Slash commands (read-only, ephemeral replies)
# ----------------------------
@app.command("/batch-suggest")
def handle_batch_suggest(ack, command, respond, logger):
    ack()

    try:
        day, levels = parse_suggest_args(
            command.get("text", ""), local_today(SETTINGS)
        )
    except ValueError as e:
        respond_error(respond, str(e))
        return

    suggestions = suggest(TEACHERS, BATCHES, day, levels or SETTINGS.candidate_levels)
    logger.info(
        "batch-suggest user=%s day=%s levels=%s suggestions=%d",
        command.get("user_id"),
        day.isoformat(),
        levels,
        len(suggestions),
    )

    respond(
        response_type="ephemeral",
        text=f"{len(suggestions)} batch suggestions",
        blocks=suggestion_blocks(day, suggestions, TEACHERS_BY_ID),
    )


@app.command("/teacher-status")
def handle_teacher_status(ack, command, respond, logger):
    ack()

    try:
        day = parse_day_arg(command.get("text", ""), local_today(SETTINGS))
    except ValueError as e:
        respond_error(respond, str(e))
        return

    avails = list(availability_by_teacher(TEACHERS, BATCHES, day).values())
    unclassified = sum(len(a.data_quality) for a in avails)
    if unclassified:
        logger.warning(
            "teacher-status day=%s batches_without_slot_tag=%d",
            day.isoformat(),
            unclassified,
        )

    respond(
        response_type="ephemeral",
        text="Teacher availability",
        blocks=availability_blocks(day, avails, TEACHERS_BY_ID),
    )


@app.command("/teachers-freeing")
def handle_teachers_freeing(ack, command, respond, logger):
    ack()

    try:
        key = parse_month_arg(command.get("text", ""), local_today(SETTINGS))
    except ValueError as e:
        respond_error(respond, str(e))
        return

    freeing = teachers_freeing_in_month(TEACHERS, BATCHES, key)
    logger.info("teachers-freeing month=%s entries=%d", key, len(freeing))

    respond(
        response_type="ephemeral",
        text=f"Teachers freeing up in {key}",
        blocks=freeing_blocks(key, freeing, TEACHERS_BY_ID),
    )


if __name__ == "__main__":
    SocketModeHandler(app, os.environ["SLACK_APP_TOKEN"]).start()
