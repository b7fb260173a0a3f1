"""
Scratch Game CLI

Usage:
    scratch-game play --config config.json --betting-amount 100
    scratch-game simulate --config config.json --betting-amount 100 --rounds 20000 --seed 7
"""

import json
import logging
import random
import sys

import click
from marshmallow import ValidationError

from scratch_game.config import Config
from scratch_game.exceptions import ConfigLoadException, InvalidBetException, ScratchGameException
from scratch_game.logging_setup import setup_logging
from scratch_game.schemas import PlayRequestSchema, RoundResultSchema
from scratch_game.utils.config_loader import load_game_config
from scratch_game.utils.round_handler import ScratchGame
from scratch_game.utils.round_tester import RoundTester

logger = logging.getLogger(__name__)

play_request_schema = PlayRequestSchema()
round_result_schema = RoundResultSchema()


def parse_betting_amount(raw_amount):
    """Parses the --betting-amount text into a float, rejecting NaN and infinities."""
    try:
        return play_request_schema.load({'betting_amount': raw_amount})['betting_amount']
    except ValidationError as e:
        messages = e.messages.get('betting_amount', e.messages)
        raise InvalidBetException(
            f"{raw_amount!r} ({'; '.join(messages) if isinstance(messages, list) else messages})",
            details={'betting_amount': raw_amount}
        ) from e


def _load_config_or_exit(config_path):
    try:
        return load_game_config(config_path)
    except ConfigLoadException as e:
        logger.error(f"Config load failed: {e}")
        click.echo(f"Error reading config file: {e}", err=True)
        sys.exit(1)


def _build_game(game_config, settings, seed=None):
    if seed is None:
        seed = settings.RNG_SEED
    rng = random.Random(seed) if seed is not None else None
    try:
        return ScratchGame(game_config, rng=rng, miss_label=settings.MISS_LABEL)
    except ScratchGameException as e:
        logger.error(f"Game construction failed: {e}")
        click.echo(f"Game error: {e}", err=True)
        sys.exit(1)


def _parse_bet_or_exit(raw_amount):
    try:
        return parse_betting_amount(raw_amount)
    except InvalidBetException as e:
        click.echo(f"Invalid betting amount: {e}", err=True)
        sys.exit(1)


@click.group()
@click.pass_context
def cli(ctx):
    """Scratch Game - play or simulate configurable scratch-card rounds."""
    ctx.ensure_object(dict)
    try:
        settings = Config.from_env()
    except ScratchGameException as e:
        click.echo(f"Game error: {e}", err=True)
        sys.exit(1)
    setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
    ctx.obj['settings'] = settings


@cli.command()
@click.option('--config', 'config_path', required=True, help='Path to the game configuration JSON file')
@click.option('--betting-amount', 'betting_amount', required=True, help='Stake for the round')
@click.pass_context
def play(ctx, config_path, betting_amount):
    """Play one round and print the result as JSON."""
    settings = ctx.obj['settings']
    game_config = _load_config_or_exit(config_path)
    bet_amount = _parse_bet_or_exit(betting_amount)
    game = _build_game(game_config, settings)

    try:
        result = game.play(bet_amount)
    except ScratchGameException as e:
        logger.error(f"Round failed: {e}", extra={'error_code': e.error_code})
        click.echo(f"Game error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(round_result_schema.dump(result), indent=2))


@cli.command()
@click.option('--config', 'config_path', required=True, help='Path to the game configuration JSON file')
@click.option('--betting-amount', 'betting_amount', required=True, help='Stake for every simulated round')
@click.option('--rounds', type=click.IntRange(min=1), default=None, help='Number of rounds (default: SCRATCH_SIM_ROUNDS)')
@click.option('--seed', type=int, default=None, help='Seed for a reproducible run')
@click.pass_context
def simulate(ctx, config_path, betting_amount, rounds, seed):
    """Play many rounds and print RTP and hit statistics as JSON."""
    settings = ctx.obj['settings']
    game_config = _load_config_or_exit(config_path)
    bet_amount = _parse_bet_or_exit(betting_amount)
    game = _build_game(game_config, settings, seed=seed)
    num_rounds = rounds if rounds is not None else settings.SIM_ROUNDS

    tester = RoundTester(game, num_rounds, bet_amount)
    try:
        summary = tester.run_simulation()
    except ScratchGameException as e:
        logger.error(f"Simulation halted after {tester.rounds_played} rounds: {e}")
        click.echo(f"Game error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(summary, indent=2))


if __name__ == '__main__':
    cli()
