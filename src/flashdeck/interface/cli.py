"""flashdeck CLI: play sessions, inspect progress and manage decks."""

import json
import logging
import sys
import time
from pathlib import Path
from typing import Annotated

import typer

from flashdeck.application.config import AppConfig, resolve_config
from flashdeck.application.factory import get_game_store, get_stats_client
from flashdeck.application.game_flow import transfer_game_results_with_bonuses
from flashdeck.application.game_store import GameStore
from flashdeck.domain.constants import MAX_LEVEL, MIN_LEVEL
from flashdeck.domain.models import AnswerResult, Focus, GameSettings, PointsBreakdown, SessionMode

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="flashdeck: leveled flashcard games in your terminal.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

cards_app = typer.Typer(help="Inspect and reset the cards of the current deck.")
app.add_typer(cards_app, name="cards")

decks_app = typer.Typer(help="Manage decks.")
app.add_typer(decks_app, name="decks")

config_app = typer.Typer(help="Manage flashdeck configuration.")
app.add_typer(config_app, name="config")

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

QUIT_WORDS = {":q", ":quit"}


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    app_name: Annotated[
        str | None,
        typer.Option("--app", help="App profile: vocabulary, spelling, multiplication."),
    ] = None,
    data_dir: Annotated[
        Path | None, typer.Option(help="Directory holding decks, history and stats.")
    ] = None,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for flashdeck."""
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {
        "app": app_name,
        "data_dir": data_dir,
        "verbose": 1 + verbose if verbose else None,
    }


def _config(ctx: typer.Context) -> AppConfig:
    overrides = (ctx.obj or {}).get("overrides", {})
    config = resolve_config(overrides)
    if config.verbose >= 2:
        logging.getLogger("flashdeck").setLevel(logging.DEBUG)
    return config


def _store(ctx: typer.Context) -> GameStore:
    return get_game_store(_config(ctx))


def _fail(message: str) -> None:
    typer.secho(message, fg="red")
    raise typer.Exit(1)


def _echo_breakdown(b: PointsBreakdown) -> None:
    parts = [f"level {b.level_points}"]
    if b.difficulty_points:
        parts.append(f"difficulty {b.difficulty_points}")
    if b.mode_multiplier != 1:
        parts.append(f"x{b.mode_multiplier}")
    if b.close_adjustment:
        parts.append(f"close -{b.close_adjustment}")
    if b.language_bonus:
        parts.append(f"language +{b.language_bonus}")
    if b.time_bonus:
        parts.append(f"speed +{b.time_bonus}")
    typer.echo(f"  +{b.total_points} points ({', '.join(parts)})")


# ---------------------------------------------------------------------------
# Play
# ---------------------------------------------------------------------------


@app.command()
def play(
    ctx: typer.Context,
    mode: Annotated[str | None, typer.Option(help="Game mode of the app.")] = None,
    focus: Annotated[Focus, typer.Option(help="Which cards to favour.")] = Focus.WEAK,
    session_mode: Annotated[
        SessionMode, typer.Option("--session", help="Session mode.")
    ] = SessionMode.STANDARD,
    language: Annotated[str | None, typer.Option(help="Language direction.")] = None,
    deck: Annotated[str | None, typer.Option(help="Deck to play.")] = None,
):
    """[bold green]Play[/bold green] a session. Type ':q' to abandon it."""
    config = _config(ctx)
    store = get_game_store(config)
    profile = store.profile

    mode = mode or profile.default_mode
    if mode not in profile.modes:
        _fail(f"Unknown mode '{mode}' for {profile.name}. Choose from: {', '.join(profile.modes)}")
    if deck is not None and deck not in store.decks.deck_names():
        _fail(f"No deck named '{deck}'.")
    if language is None and profile.languages:
        language = profile.languages[0]

    settings = GameSettings(
        mode=mode, focus=focus, language=language, deck=deck, session_mode=session_mode
    )
    if not store.start_game(settings):
        typer.secho("Resuming your unfinished session.", fg="yellow")
    if not store.is_active:
        store.discard_game()
        typer.secho("No cards to play for these settings.", fg="yellow")
        return

    settings = store.game_settings
    is_over = False
    while not is_over:
        card = store.current_card
        position = f"[{store.current_card_index + 1}/{len(store.game_cards)}]"
        typer.echo(f"\n{position} {profile.question_for(card, settings)}")
        started = time.monotonic()
        given = typer.prompt("Answer", default="", show_default=False)
        elapsed = time.monotonic() - started

        if given.strip() in QUIT_WORDS:
            store.discard_game()
            typer.secho("Session abandoned.", fg="yellow")
            return

        result = profile.check_answer(given, card, settings)
        breakdown = store.handle_answer(result, elapsed)
        color = {AnswerResult.CORRECT: "green", AnswerResult.CLOSE: "yellow"}.get(result, "red")
        typer.secho(f"  {result.value}", fg=color)
        if result is not AnswerResult.CORRECT:
            typer.echo(f"  expected: {profile.answer_for(card, settings)}")
        _echo_breakdown(breakdown)

        is_over = store.next_card()

    entry = store.finish_game()
    outcome = transfer_game_results_with_bonuses(store, entry)
    typer.secho(
        f"\nGame over: {outcome.entry.correct_answers}/{outcome.entry.total_cards} correct, "
        f"{outcome.total_points} points",
        fg="green",
    )
    if outcome.bonus_points:
        typer.echo(f"Daily bonus: +{outcome.bonus_points}")

    client = get_stats_client(config)
    if client is not None:
        client.write()


# ---------------------------------------------------------------------------
# Progress
# ---------------------------------------------------------------------------


@app.command()
def stats(ctx: typer.Context):
    """Show cumulative statistics."""
    store = _store(ctx)
    s = store.game_stats
    typer.echo(f"Games played: {s.games_played}")
    typer.echo(f"Points: {s.points}")
    typer.echo(f"Correct answers: {s.correct_answers}")


@app.command()
def history(
    ctx: typer.Context,
    limit: Annotated[int, typer.Option(help="Show the last N games.")] = 10,
):
    """Show recent games."""
    store = _store(ctx)
    entries = store.history[-limit:] if limit > 0 else []
    if not entries:
        typer.echo("No games played yet.")
        return
    for entry in reversed(entries):
        typer.echo(
            f"{entry.date[:16]}  {entry.points:>4} pts  "
            f"{entry.correct_answers}/{entry.total_cards}  "
            f"{entry.settings.mode}/{entry.settings.focus.value}"
        )


# ---------------------------------------------------------------------------
# Cards subgroup
# ---------------------------------------------------------------------------


@cards_app.command("list")
def cards_list(ctx: typer.Context):
    """List cards with level and times."""
    store = _store(ctx)
    for card in store.all_cards:
        times = " ".join(f"{k}={v:g}s" for k, v in card.times.items()) or f"time={card.time:g}s"
        typer.echo(f"L{card.level}  {card.key}  ->  {card.answer}  ({times})")

    counts = {level: 0 for level in range(MIN_LEVEL, MAX_LEVEL + 1)}
    for card in store.all_cards:
        counts[card.level] += 1
    typer.echo("Levels: " + "  ".join(f"{lvl}:{n}" for lvl, n in counts.items()))


@cards_app.command("move")
def cards_move(
    ctx: typer.Context,
    level: Annotated[int, typer.Argument(help="Target level (1-5).")],
):
    """Move every card of the current deck to LEVEL."""
    store = _store(ctx)
    if not store.move_all_cards(level):
        _fail(f"Level must be between {MIN_LEVEL} and {MAX_LEVEL}.")
    typer.secho(f"Moved {len(store.all_cards)} cards to level {level}.", fg="green")


@cards_app.command("reset")
def cards_reset(
    ctx: typer.Context,
    defaults: Annotated[
        bool, typer.Option("--defaults", help="Replace the cards with the default set.")
    ] = False,
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation.")] = False,
):
    """Wipe all progress of the current deck."""
    if not force:
        typer.confirm("Reset all progress of the current deck?", abort=True)
    store = _store(ctx)
    if defaults:
        store.reset_cards_to_default()
    else:
        store.reset_all_cards()
    typer.secho("Cards reset.", fg="green")


# ---------------------------------------------------------------------------
# Decks subgroup
# ---------------------------------------------------------------------------


@decks_app.command("list")
def decks_list(ctx: typer.Context):
    store = _store(ctx)
    current = store.current_deck_name()
    for deck in store.get_decks():
        marker = "*" if deck.name == current else " "
        typer.echo(f"{marker} {deck.name} ({len(deck.cards)} cards)")


@decks_app.command("add")
def decks_add(ctx: typer.Context, name: str):
    if not _store(ctx).add_deck(name):
        _fail(f"A deck named '{name}' already exists.")
    typer.secho(f"Added deck '{name}'.", fg="green")


@decks_app.command("rename")
def decks_rename(ctx: typer.Context, old_name: str, new_name: str):
    if not _store(ctx).rename_deck(old_name, new_name):
        _fail(f"Cannot rename '{old_name}' to '{new_name}'.")
    typer.secho(f"Renamed '{old_name}' to '{new_name}'.", fg="green")


@decks_app.command("remove")
def decks_remove(ctx: typer.Context, name: str):
    if not _store(ctx).remove_deck(name):
        _fail(f"Cannot remove '{name}': unknown deck or the last remaining one.")
    typer.secho(f"Removed deck '{name}'.", fg="green")


@decks_app.command("use")
def decks_use(ctx: typer.Context, name: str):
    """Make NAME the current deck."""
    if not _store(ctx).switch_deck(name):
        _fail(f"No deck named '{name}'.")
    typer.secho(f"Now using deck '{name}'.", fg="green")


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show(ctx: typer.Context):
    """Display final resolved configuration."""
    config = _config(ctx)
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


def main() -> None:
    app()
