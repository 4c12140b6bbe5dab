"""
Engine-generated visitors.

These encounters depend on live state (coin balance, planet names, the
bounty fee) so they are built on demand instead of living in the JSON
catalog. The selector decides when each one appears.
"""

from ..state.schema import (
    BountyEffect,
    BountyStage,
    Effects,
    Planet,
    ScienceEffect,
    TaxCollectionEffect,
    Visitor,
    VisitorOption,
    WarCampaign,
    WarEffect,
    WarSurrenderEffect,
)
from ..tools.dice import round_half_up


# Visitor ids the engine checks against
TUTORIAL_INTRO_ID = "royal_advisor_intro"
TUTORIAL_RULES_ID = "royal_advisor_rules"
HAPPY_CITIZEN_ID = "happy_citizen"
GOD_WRATH_ID = "god_attack"
JESTER_ID = "jester_entertainment"
INTERN_ID = "intern_money"
SCIENTIST_FUNDING_ID = "scientist_more_funding"
SCIENTIST_COMPLETE_ID = "scientist_complete"
BOUNTY_SUCCESS_ID = "bounty_result_success"
BOUNTY_FAILURE_ID = "bounty_result_fail"
BOUNTY_HUNTER_ID = "bounty_hunter"  # Catalog visitor that starts the contract
TAX_COLLECTOR_ID = "tax_collector"
WAR_GENERAL_ID = "war_general"

# Encounters that do not use up one of the day's visit slots
NON_COUNTING_VISITORS = frozenset({JESTER_ID, INTERN_ID, TAX_COLLECTOR_ID})

HAPPY_CITIZEN_PER_PLANET = 15
GOD_WRATH_SHARE = 0.25
BOUNTY_BASE_FEE = 40
BOUNTY_FEE_STEP = 20

DEFEND_COST = 60
HEAVY_DEFEND_COST = 110
ATTACK_COST = 80
HEAVY_ATTACK_COST = 140

INTERN_TEXTS = (
    "My lord, I sold my rare minecraft account. Here is your cut!",
    "My lord, I sold a rock. It was a cool rock.",
    "My lord, I vibe coded a multi million dollar company. Here's your cut!",
    "My lord, someone paid me to stop singing. I took the deal.",
    "My lord, I found money on the ground. Finders keepers right?",
    "Hey, I found a really heavy sock. You can have what's in it.",
    "Waiter asked for a tip, I gave him -10 dollars. Here's your share!",
)


def tutorial_visitor(step: int) -> Visitor:
    """The royal advisor's two-part welcome (step 0 or 1)."""
    if step == 0:
        return Visitor(
            id=TUTORIAL_INTRO_ID,
            name="Royal Advisor",
            sprite="royal_advisor.png",
            text=(
                "Welcome, {user}, to your new role as the ruler of this fledgling "
                "space empire. Your journey to galactic domination begins now. "
                "May your reign be prosperous and your enemies quack in fear!"
            ),
            options=[
                VisitorOption(
                    id="royal_advisor_acknowledge",
                    text="I am ready to lead.",
                    reaction="Excellent! Let me teach you how to play.",
                ),
            ],
        )
    return Visitor(
        id=TUTORIAL_RULES_ID,
        name="Royal Advisor",
        sprite="royal_advisor.png",
        text=(
            "To play, you must pick one of the options each visitor gives you. "
            "Manage your coins and happiness to avoid rebellion. Expand your "
            "empire by acquiring planets, and defend them from enemies. "
            "Good luck, {user}!"
        ),
        options=[
            VisitorOption(
                id="royal_advisor_acknowledge",
                text="Alright!",
                reaction="I wish you luck in your journey!",
            ),
            VisitorOption(
                id="royal_advisor_more_tutorial",
                text="Awesome!",
                reaction="I wish you luck in your journey!",
            ),
        ],
    )


def happy_citizen_visitor(owned_count: int) -> Visitor:
    return Visitor(
        id=HAPPY_CITIZEN_ID,
        name="Happy Citizen",
        sprite="happy_citizen.png",
        text=(
            "You are the coolest lord ever! Me and all my friends pooled together "
            "our money to make this donation to you!"
        ),
        options=[
            VisitorOption(
                id="acknowledge",
                text="Thank you so much!",
                reaction="Anything for the greatest lord of all time!",
                effects=Effects(coins=owned_count * HAPPY_CITIZEN_PER_PLANET),
            ),
        ],
    )


def god_wrath_visitor(coins: int) -> Visitor:
    return Visitor(
        id=GOD_WRATH_ID,
        name="God",
        sprite="god.png",
        text=(
            "You have refused to give me a sacrifice. Now you must face my wrath. "
            "Say goodbye to 25% of your coins."
        ),
        options=[
            VisitorOption(
                id="god_accept_fate",
                text="I accept my fate.",
                reaction="So be it.",
                effects=Effects(coins=-round_half_up(coins * GOD_WRATH_SHARE)),
            ),
        ],
    )


def jester_visitor() -> Visitor:
    return Visitor(
        id=JESTER_ID,
        name="Jester",
        sprite="jester.png",
        text="My lord, I have prepared some entertainment to lift your spirits!",
        options=[
            VisitorOption(
                id="jester_perform",
                text="Let's see it!",
                reaction="I hope you enjoy!",
                effects=Effects(happiness=5, rebellion_delta=-3),
            ),
        ],
    )


def intern_visitor(text: str) -> Visitor:
    return Visitor(
        id=INTERN_ID,
        name="Intern",
        sprite="intern.png",
        text=text,
        options=[
            VisitorOption(
                id="intern_give",
                text="Awesome!",
                reaction="No problem boss!",
                effects=Effects(coins=10),
            ),
        ],
    )


def scientist_funding_visitor() -> Visitor:
    return Visitor(
        id=SCIENTIST_FUNDING_ID,
        name="Scientist",
        sprite="scientist.png",
        text=(
            "Lord, we are close! Just a little more funding, and we will be able "
            "to make a breakthrough!"
        ),
        options=[
            VisitorOption(
                id="fund_science",
                text="Alright, take the funds. (-40 coins)",
                reaction="Thank you, my lord! I shall come back shortly with my findings!",
                effects=Effects(coins=-40, happiness=10, special=ScienceEffect(step=2)),
            ),
            VisitorOption(
                id="decline_funding",
                text="I cannot spare the coins right now.",
                reaction="It is a shame I have to give up when I'm so close. But alright.",
                effects=Effects(happiness=-5, special=ScienceEffect(step=3)),
            ),
        ],
    )


def scientist_complete_visitor() -> Visitor:
    return Visitor(
        id=SCIENTIST_COMPLETE_ID,
        name="Scientist",
        sprite="scientist.png",
        text="Thank you for your faith my lord! With your funding, we have achieved greatness!",
        options=[
            VisitorOption(
                id="accept",
                text="Awesome!",
                reaction="I will do my best to continue achieving glory for the empire!",
                effects=Effects(coins=100, happiness=50, special=ScienceEffect(step=3)),
            ),
        ],
    )


def bounty_fee(failures: int) -> int:
    """Price of keeping the hunter on the job after `failures` misses."""
    return BOUNTY_BASE_FEE + BOUNTY_FEE_STEP * failures


def bounty_success_visitor(name: str, sprite: str) -> Visitor:
    return Visitor(
        id=BOUNTY_SUCCESS_ID,
        name=name,
        sprite=sprite,
        text=(
            "Overlord, I have found the criminal and dealt with them. "
            "Your subjects are safer now."
        ),
        options=[
            VisitorOption(
                id="bounty_success_ack",
                text="Excellent work.",
                reaction="As promised, the threat is gone. Payment accepted, my lord.",
                effects=Effects(happiness=20, rebellion_delta=-15),
            ),
        ],
    )


def bounty_failure_visitor(name: str, sprite: str, failures: int) -> Visitor:
    fee = bounty_fee(failures)
    return Visitor(
        id=BOUNTY_FAILURE_ID,
        name=name,
        sprite=sprite,
        text=(
            "I have not yet found the criminal, overlord. They are elusive. "
            "Shall I continue the hunt?"
        ),
        options=[
            VisitorOption(
                id="bounty_fail_continue",
                text=f"Yes, keep hunting. (-{fee} coins)",
                reaction=(
                    "Understood. I will keep tracking them. "
                    "My fee rises with every passing day."
                ),
                effects=Effects(
                    coins=-fee,
                    rebellion_delta=-5,
                    special=BountyEffect(stage=BountyStage.CONTINUE),
                ),
            ),
            VisitorOption(
                id="bounty_fail_stop",
                text="No. Stand down.",
                reaction=(
                    "Then whatever they do next is on your head, overlord. "
                    "Your people know you let the criminal walk."
                ),
                effects=Effects(
                    happiness=-10,
                    rebellion_delta=15,
                    special=BountyEffect(stage=BountyStage.STAND_DOWN),
                ),
            ),
        ],
    )


def tax_collector_visitor() -> Visitor:
    return Visitor(
        id=TAX_COLLECTOR_ID,
        name="Imperial Tax Collector",
        sprite="tax_collector.png",
        text=(
            "Lord {user}, your citizens have paid their taxes. "
            "Their bread now fills your vaults."
        ),
        options=[
            VisitorOption(
                id="accept_taxes",
                text="Good job.",
                reaction=(
                    "I thank my liege for showing such kindness to a "
                    "featherbrained individual like me."
                ),
                effects=Effects(special=TaxCollectionEffect()),
            ),
        ],
    )


def war_cost(investment: int, discount: float) -> int:
    return round_half_up(investment * discount)


def war_defense_visitor(ours: Planet, enemy: Planet, discount: float = 1.0) -> Visitor:
    """Our planet is under attack: defend normally, heavily, or abandon it."""
    options = []
    for option_id, investment, label, reaction in (
        ("defend_planet_normal", DEFEND_COST, f"Defend {ours.name}",
         "We will do our best with the resources given."),
        ("defend_planet_heavy", HEAVY_DEFEND_COST, "Invest heavily in the defense",
         "We will throw everything we have at the enemy."),
    ):
        cost = war_cost(investment, discount)
        options.append(VisitorOption(
            id=option_id,
            text=f"{label} (-{cost} coins)",
            reaction=reaction,
            effects=Effects(
                coins=-cost,
                special=WarEffect(
                    campaign=WarCampaign.DEFENSE,
                    investment=investment,
                    our_planet_id=ours.id,
                    enemy_planet_id=enemy.id,
                ),
            ),
        ))
    options.append(VisitorOption(
        id="abandon_planet",
        text=f"We cannot afford it. Abandon {ours.name}.",
        reaction=f"{ours.name} will fall without resistance.",
        effects=Effects(special=WarSurrenderEffect(planet_id=ours.id)),
    ))

    return Visitor(
        id=WAR_GENERAL_ID,
        name="War General",
        sprite="war_general.png",
        text=(
            f"Lord, our planet {ours.name} is being attacked by {enemy.name}. "
            "We must decide our investment."
        ),
        options=options,
    )


def war_attack_visitor(enemy: Planet, discount: float = 1.0) -> Visitor:
    """Offer to invade an unowned planet."""
    options = []
    for option_id, investment, label, reaction in (
        ("start_attack_normal", ATTACK_COST, f"Attack {enemy.name}",
         "We will create a solid force."),
        ("start_attack_heavy", HEAVY_ATTACK_COST, "Launch a massive invasion",
         "We will overwhelm them with sheer power."),
    ):
        cost = war_cost(investment, discount)
        options.append(VisitorOption(
            id=option_id,
            text=f"{label} (-{cost} coins)",
            reaction=reaction,
            effects=Effects(
                coins=-cost,
                special=WarEffect(
                    campaign=WarCampaign.ATTACK,
                    investment=investment,
                    enemy_planet_id=enemy.id,
                ),
            ),
        ))
    options.append(VisitorOption(
        id="decline_attack",
        text="Not now.",
        reaction="Very well. The army will remain on standby.",
    ))

    return Visitor(
        id=WAR_GENERAL_ID,
        name="War General",
        sprite="war_general.png",
        text=(
            f"Lord, for an investment of coins we can attack {enemy.name}. "
            "How much shall we commit?"
        ),
        options=options,
    )
