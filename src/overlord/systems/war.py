"""
War resolution for Duck Overlord.

Single-roll combat: the enemy fields a random force, the player's
investment is turned into a win probability, and one draw decides the
battle. Defending is easier than attacking.
"""

from dataclasses import dataclass

from ..state.schema import GameState, WarCampaign, WarEffect
from ..tools.dice import RandomSource, chance, roll_below

ENEMY_BASE = {
    WarCampaign.DEFENSE: 30,
    WarCampaign.ATTACK: 50,
}
ENEMY_SPREAD = 40
DEFENSE_BONUS = 0.15
DEFENSE_FLOOR = 0.85
MIN_WIN_CHANCE = 0.05
MAX_WIN_CHANCE = 0.95

WIN_HAPPINESS = 5
LOSS_HAPPINESS = {
    WarCampaign.ATTACK: -5,
    WarCampaign.DEFENSE: -10,
}


@dataclass
class WarOutcome:
    """What happened on the battlefield."""
    campaign: WarCampaign
    won: bool
    win_chance: float
    enemy_strength: int
    investment: int
    planet_gained: str | None = None
    planet_lost: str | None = None
    happiness_delta: int = 0

    @property
    def narrative(self) -> str:
        if self.won:
            if self.campaign == WarCampaign.DEFENSE:
                return "Your forces prevail and the planet is successfully defended."
            if self.planet_gained:
                return "Your army conquers the enemy world and adds it to your empire."
            return "Your attack is successful."
        if self.campaign == WarCampaign.DEFENSE:
            if self.planet_lost:
                return (
                    "Despite your efforts, the enemy overwhelms your defenses "
                    "and the planet is lost."
                )
            return "Your forces are defeated and you lose the battle."
        return "The campaign fails and your forces are driven back."


def roll_enemy_strength(campaign: WarCampaign, rng: RandomSource) -> int:
    return ENEMY_BASE[campaign] + roll_below(ENEMY_SPREAD, rng)


def win_probability(campaign: WarCampaign, investment: int, enemy_strength: int) -> float:
    """
    Chance that `investment` beats `enemy_strength`.

    investment / (investment / 1.5 + enemy), plus the defender's bonus and
    floor, clamped to [0.05, 0.95]. Non-decreasing in investment.
    """
    denominator = investment / 1.5 + enemy_strength
    p = investment / denominator if denominator > 0 else 0.0

    if campaign == WarCampaign.DEFENSE:
        p += DEFENSE_BONUS
        if investment >= enemy_strength:
            p = max(p, DEFENSE_FLOOR)

    return max(MIN_WIN_CHANCE, min(MAX_WIN_CHANCE, p))


def resolve_war(
    campaign: WarCampaign,
    investment: int,
    rng: RandomSource,
    our_planet_id: str | None = None,
    enemy_planet_id: str | None = None,
) -> WarOutcome:
    """Roll the enemy force and the battle. Does not touch state."""
    enemy = roll_enemy_strength(campaign, rng)
    p = win_probability(campaign, investment, enemy)
    won = chance(p, rng)

    outcome = WarOutcome(
        campaign=campaign,
        won=won,
        win_chance=p,
        enemy_strength=enemy,
        investment=investment,
    )
    if won:
        outcome.happiness_delta = WIN_HAPPINESS
        if campaign == WarCampaign.ATTACK:
            outcome.planet_gained = enemy_planet_id
    else:
        outcome.happiness_delta = LOSS_HAPPINESS[campaign]
        if campaign == WarCampaign.DEFENSE:
            outcome.planet_lost = our_planet_id
    return outcome


def apply_war(state: GameState, effect: WarEffect, rng: RandomSource) -> WarOutcome:
    """
    Resolve a war effect onto an already-copied state.

    Transfers planets and shifts happiness; coin costs were paid by the
    option's own delta.
    """
    outcome = resolve_war(
        effect.campaign,
        effect.investment,
        rng,
        our_planet_id=effect.our_planet_id,
        enemy_planet_id=effect.enemy_planet_id,
    )

    if outcome.planet_gained:
        state.set_planet_owned(outcome.planet_gained, True)
    if outcome.planet_lost:
        state.set_planet_owned(outcome.planet_lost, False)

    state.player.happiness = max(0, min(100, state.player.happiness + outcome.happiness_delta))
    return outcome
