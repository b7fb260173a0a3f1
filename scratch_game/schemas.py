from marshmallow import EXCLUDE, Schema, fields, post_load
from marshmallow.validate import OneOf

from .models import BONUS, STANDARD, GameConfig, SymbolDef, WinPatternDef


class _DocumentSchema(Schema):
    class Meta:
        unknown = EXCLUDE


# --- Configuration document (load) ---

class SymbolSchema(_DocumentSchema):
    reward_multiplier = fields.Float(load_default=0.0)
    type = fields.Str(required=True, validate=OneOf([STANDARD, BONUS]))
    # Multipliers, impact and extra are checked when they are used in a round.
    impact = fields.Str(load_default=None, allow_none=True)
    extra = fields.Float(load_default=None, allow_none=True)


class WinCombinationSchema(_DocumentSchema):
    reward_multiplier = fields.Float(required=True)
    when = fields.Str(required=True)
    count = fields.Int(load_default=None, allow_none=True)
    group = fields.Str(load_default=None, allow_none=True)
    covered_areas = fields.List(fields.List(fields.Str()), load_default=list)


class StandardSymbolProbabilitySchema(_DocumentSchema):
    row = fields.Int(load_default=0)
    column = fields.Int(load_default=0)
    symbols = fields.Dict(keys=fields.Str(), values=fields.Int(), load_default=dict)


class BonusSymbolProbabilitySchema(_DocumentSchema):
    symbols = fields.Dict(keys=fields.Str(), values=fields.Int(), load_default=dict)


class ProbabilitiesSchema(_DocumentSchema):
    standard_symbols = fields.List(fields.Nested(StandardSymbolProbabilitySchema), load_default=list)
    bonus_symbols = fields.Nested(BonusSymbolProbabilitySchema, load_default=None, allow_none=True)


class GameConfigSchema(_DocumentSchema):
    """Loads a configuration document into a GameConfig."""

    rows = fields.Int(load_default=3)
    columns = fields.Int(load_default=3)
    symbols = fields.Dict(keys=fields.Str(), values=fields.Nested(SymbolSchema), required=True)
    win_combinations = fields.Dict(keys=fields.Str(), values=fields.Nested(WinCombinationSchema), required=True)
    probabilities = fields.Nested(ProbabilitiesSchema, required=True)

    @post_load
    def make_game_config(self, data, **kwargs):
        symbols = {
            label: SymbolDef(
                label=label,
                kind=s['type'],
                reward_multiplier=s['reward_multiplier'],
                impact=s['impact'],
                extra=s['extra'],
            )
            for label, s in data['symbols'].items()
        }
        win_combinations = {
            name: WinPatternDef(
                name=name,
                when=wc['when'],
                reward_multiplier=wc['reward_multiplier'],
                count=wc['count'],
                covered_areas=tuple(tuple(area) for area in wc['covered_areas']),
                group=wc['group'],
            )
            for name, wc in data['win_combinations'].items()
        }
        standard_weights = {}
        for entry in data['probabilities']['standard_symbols']:
            # First entry for a position wins.
            standard_weights.setdefault((entry['row'], entry['column']), dict(entry['symbols']))

        bonus = data['probabilities'].get('bonus_symbols')
        bonus_weights = dict(bonus['symbols']) if bonus is not None else None

        return GameConfig(
            rows=data['rows'],
            columns=data['columns'],
            symbols=symbols,
            win_combinations=win_combinations,
            standard_weights=standard_weights,
            bonus_weights=bonus_weights,
        )


# --- Round input / output ---

class PlayRequestSchema(Schema):
    betting_amount = fields.Float(required=True)


class RoundResultSchema(Schema):
    matrix = fields.List(fields.List(fields.Str()), dump_only=True)
    reward = fields.Float(dump_only=True)
    applied_winning_combinations = fields.Dict(
        keys=fields.Str(), values=fields.List(fields.Str()), dump_only=True
    )
    applied_bonus_symbol = fields.Str(allow_none=True, dump_only=True)
