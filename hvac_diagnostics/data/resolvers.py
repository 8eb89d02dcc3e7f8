"""
Resolver Table.

Pure functions turning a flow's answer history (step position -> chosen
option text) into the final Recommendation. Flows reference them by name from
their Terminate transitions; the table is read-only once built.
"""

from types import MappingProxyType
from typing import Callable, Dict, Mapping

from hvac_diagnostics.domain.models import Category, Recommendation

Answers = Mapping[int, str]
Resolver = Callable[[Answers], Recommendation]


def _answer(answers: Answers, position: int) -> str:
    return answers.get(position, "")


# ==============================================================================
# COOLING FAILURE
# ==============================================================================

def cooling_thermostat(answers: Answers) -> Recommendation:
    return Recommendation(
        text=(
            "Great! Adjusting the thermostat often solves the problem. If it still "
            "doesn't cool after 15-20 minutes, please start this diagnostic again."
        ),
        category=Category.SCHEDULED_REPAIR,
    )


def cooling_blocked_vents(answers: Answers) -> Recommendation:
    return Recommendation(
        text=(
            "Blocked vents can severely restrict airflow. Please clear any "
            "obstructions and see if that improves cooling. If not, let's continue."
        ),
        category=Category.SCHEDULED_REPAIR,
    )


def cooling_dirty_filter(answers: Answers) -> Recommendation:
    return Recommendation(
        text=(
            "A dirty filter is a very common cause of cooling issues. Please replace "
            "it with a new one. If the problem continues with a clean filter, we "
            "recommend booking a technician."
        ),
        category=Category.SCHEDULED_REPAIR,
    )


def cooling_tripped_breaker(answers: Answers) -> Recommendation:
    return Recommendation(
        text=(
            "Please try resetting the breaker. If it trips again immediately, DO NOT "
            "reset it again and call us, as this indicates a serious electrical issue "
            "requiring urgent attention."
        ),
        category=Category.EMERGENCY_REPAIR,
    )


def cooling_ice_check(answers: Answers) -> Recommendation:
    if _answer(answers, 5).startswith("Yes"):
        return Recommendation(
            text=(
                "Ice buildup indicates a serious issue like low refrigerant or blocked "
                "airflow. Please turn OFF your AC system to allow it to thaw and "
                "prevent damage. This requires a professional technician to fix."
            ),
            category=Category.EMERGENCY_REPAIR,
        )
    return Recommendation(
        text=(
            "If both indoor and outdoor units are running but not cooling, it could "
            "be low refrigerant or a compressor issue. A technician will need to "
            "diagnose this."
        ),
        category=Category.SCHEDULED_REPAIR,
    )


def cooling_outdoor_unit_electrical(answers: Answers) -> Recommendation:
    if "humming" in _answer(answers, 4):
        return Recommendation(
            text=(
                "A humming sound without the fan spinning often points to a failed "
                "capacitor. This is a common repair for a technician."
            ),
            category=Category.SCHEDULED_REPAIR,
        )
    return Recommendation(
        text=(
            "Since the outdoor unit isn't running, the issue could be a faulty "
            "capacitor, contactor, or motor. A professional is needed for a safe and "
            "accurate diagnosis."
        ),
        category=Category.SCHEDULED_REPAIR,
    )


# ==============================================================================
# HEATING FAILURE
# ==============================================================================

def heating_thermostat(answers: Answers) -> Recommendation:
    return Recommendation(
        text=(
            "Perfect. Correct thermostat settings are key. If it doesn't heat up in "
            "15-20 minutes, let's continue troubleshooting."
        ),
        category=Category.SCHEDULED_REPAIR,
    )


def heating_power_switch(answers: Answers) -> Recommendation:
    return Recommendation(
        text=(
            "Flipping that switch on may solve it! Give it a few minutes to start up. "
            "If nothing happens, there might be another issue."
        ),
        category=Category.SCHEDULED_REPAIR,
    )


def heating_dirty_filter(answers: Answers) -> Recommendation:
    return Recommendation(
        text=(
            "A dirty filter is a frequent cause of furnace failure. Please replace the "
            "filter. If the furnace still won't stay on, a technician should "
            "investigate."
        ),
        category=Category.SCHEDULED_REPAIR,
    )


def heating_exhaust_vent(answers: Answers) -> Recommendation:
    if _answer(answers, 4).startswith("Yes"):
        return Recommendation(
            text=(
                "Clearing the vent is critical for safety and operation. Once cleared, "
                "try restarting the furnace. If it still fails, call us immediately."
            ),
            category=Category.EMERGENCY_REPAIR,
        )
    # Step 2 asks whether the furnace attempts to ignite
    if _answer(answers, 2).startswith("Yes"):
        return Recommendation(
            text=(
                "Since the furnace is trying to start but failing, the issue is likely "
                "a dirty flame sensor or a faulty ignitor. For your safety, this "
                "requires a certified technician to inspect."
            ),
            category=Category.SCHEDULED_REPAIR,
        )
    return Recommendation(
        text=(
            "Because the system isn't even trying to start, the problem could be with "
            "the thermostat, control board, or an internal safety switch. A technician "
            "will need to diagnose the electrical components."
        ),
        category=Category.SCHEDULED_REPAIR,
    )


# ==============================================================================
# ABNORMAL NOISE
# ==============================================================================

NOISE_CAUSES = MappingProxyType({
    "Grinding": "a problem with the motor bearings, which is serious.",
    "Squealing": "a worn belt or malfunctioning motor, which needs immediate attention.",
    "Banging": "a loose or broken part, like a fan blade or connecting rod.",
    "Hissing": "a significant refrigerant leak or a leak in your ductwork.",
})


def noise_type(answers: Answers) -> Recommendation:
    noise = _answer(answers, 1)
    issue = next(
        (cause for prefix, cause in NOISE_CAUSES.items() if noise.startswith(prefix)),
        "an issue that needs a closer look.",
    )
    return Recommendation(
        text=(
            f"A {noise.lower()} noise often indicates {issue} For your safety and to "
            "prevent further damage, it's best to turn off your system and have a "
            "technician inspect it right away."
        ),
        category=Category.EMERGENCY_REPAIR,
    )


# ==============================================================================
# WATER LEAK
# ==============================================================================

def leak_drain_pan(answers: Answers) -> Recommendation:
    return Recommendation(
        text=(
            "An overflowing drain pan requires immediate attention. A technician needs "
            "to clear the clogged condensate line to prevent serious water damage to "
            "your home."
        ),
        category=Category.EMERGENCY_REPAIR,
    )


def leak_frozen_unit(answers: Answers) -> Recommendation:
    if _answer(answers, 3).startswith("Yes"):
        return Recommendation(
            text=(
                "A frozen outdoor unit is a sign of a serious issue like restricted "
                "airflow or low refrigerant. Please turn the system off and schedule a "
                "technician."
            ),
            category=Category.EMERGENCY_REPAIR,
        )
    return Recommendation(
        text=(
            "Excessive water from the outdoor unit could be a clogged defrost drain or "
            "another issue. We recommend a service call to get it checked out."
        ),
        category=Category.SCHEDULED_REPAIR,
    )


# ==============================================================================
# GENERIC FALLBACK
# ==============================================================================

def fallback_thermostat(answers: Answers) -> Recommendation:
    return Recommendation(
        text=(
            "Please check that your thermostat is on the correct setting (Cool/Heat) "
            "and has fresh batteries. If that doesn't solve it, we recommend booking a "
            "technician."
        ),
        category=Category.SCHEDULED_REPAIR,
    )


def fallback_filter_check(answers: Answers) -> Recommendation:
    if _answer(answers, 2) == "No, it's dirty":
        return Recommendation(
            text=(
                "A dirty filter is a very common cause of issues. Please try replacing "
                "your air filter. If the problem continues after that, a technician "
                "should take a look."
            ),
            category=Category.SCHEDULED_REPAIR,
        )
    return Recommendation(
        text=(
            "Thanks for checking the basics. It sounds like the issue is with the "
            "system itself and requires a professional technician for a safe and "
            "accurate diagnosis."
        ),
        category=Category.SCHEDULED_REPAIR,
    )


_RESOLVERS: Dict[str, Resolver] = {
    "cooling.thermostat": cooling_thermostat,
    "cooling.blocked_vents": cooling_blocked_vents,
    "cooling.dirty_filter": cooling_dirty_filter,
    "cooling.tripped_breaker": cooling_tripped_breaker,
    "cooling.ice_check": cooling_ice_check,
    "cooling.outdoor_unit_electrical": cooling_outdoor_unit_electrical,
    "heating.thermostat": heating_thermostat,
    "heating.power_switch": heating_power_switch,
    "heating.dirty_filter": heating_dirty_filter,
    "heating.exhaust_vent": heating_exhaust_vent,
    "noise.noise_type": noise_type,
    "leak.drain_pan": leak_drain_pan,
    "leak.frozen_unit": leak_frozen_unit,
    "fallback.thermostat": fallback_thermostat,
    "fallback.filter_check": fallback_filter_check,
}

RESOLVERS: Mapping[str, Resolver] = MappingProxyType(_RESOLVERS)
