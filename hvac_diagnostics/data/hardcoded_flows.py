from types import MappingProxyType

from hvac_diagnostics.domain.models import (
    Category,
    Flow,
    FlowKey,
    Goto,
    Recommendation,
    Step,
    Terminate,
    TerminalOverride,
)

DEFAULT_RECOMMENDATION = Recommendation(
    text="Based on your answers, we recommend having a professional technician inspect your system.",
    category=Category.SCHEDULED_REPAIR,
)

# ==============================================================================
# COOLING FAILURE
# ==============================================================================

cooling_flow = Flow(
    key=FlowKey.COOLING_FAILURE,
    title="AC Not Cooling",
    default_recommendation=DEFAULT_RECOMMENDATION,
    steps=(
        # 0: THERMOSTAT
        Step(
            prompt=(
                "I see your AC isn't cooling. First, is your thermostat set to 'COOL' and "
                "the temperature set at least 5 degrees below the current room temperature?"
            ),
            options=("Yes, it's set correctly", "No, I'll fix it now"),
            transitions=(Goto(1), Terminate("cooling.thermostat")),
        ),
        # 1: VENTS
        Step(
            prompt=(
                "Good. Now, are the air vents in your rooms open and free of obstructions "
                "like furniture or curtains?"
            ),
            options=("Yes, all vents are clear", "No, some were blocked"),
            transitions=(Goto(2), Terminate("cooling.blocked_vents")),
        ),
        # 2: AIR FILTER
        Step(
            prompt=(
                "Okay. Next, have you checked your air filter in the last month? A dirty "
                "filter can block airflow."
            ),
            options=("Yes, it's clean", "No, it's dirty / I'll check now"),
            transitions=(Goto(3), Terminate("cooling.dirty_filter")),
        ),
        # 3: BREAKER
        Step(
            prompt=(
                "Let's check the circuit breakers for the AC system, often labeled 'Air "
                "Conditioner' or 'Condenser' in your electrical panel. Are they on?"
            ),
            options=("Yes, they are on", "No, one was tripped"),
            transitions=(Goto(4), Terminate("cooling.tripped_breaker")),
        ),
        # 4: OUTDOOR UNIT
        Step(
            prompt=(
                "Now, please check the outdoor unit (the big fan outside). Is it running? "
                "You should hear the fan and possibly feel air blowing from the top."
            ),
            options=(
                "Yes, it's running",
                "No, it's not running",
                "It's humming but the fan isn't spinning",
            ),
            transitions=(Goto(5), Goto(6), Goto(6)),
        ),
        # 5: ICE ON REFRIGERANT LINES
        Step(
            prompt=(
                "If the fan is running but you're not getting cold air, check for ice "
                "buildup on the copper pipes leading into your home. Do you see any ice?"
            ),
            options=("Yes, there's ice", "No, it looks normal"),
            transitions=(Terminate("cooling.ice_check"), Terminate("cooling.ice_check")),
        ),
        # 6: ELECTRICAL (converges from step 4)
        Step(
            prompt="If the outdoor unit isn't running or just humming, it's likely an electrical issue.",
            options=("Book a Technician",),
            transitions=(Terminate("cooling.outdoor_unit_electrical"),),
        ),
    ),
)

# ==============================================================================
# HEATING FAILURE
# ==============================================================================

heating_flow = Flow(
    key=FlowKey.HEATING_FAILURE,
    title="Heat Not Working",
    default_recommendation=DEFAULT_RECOMMENDATION,
    steps=(
        # 0: THERMOSTAT
        Step(
            prompt=(
                "Sorry to hear your heat isn't working. First, is your thermostat set to "
                "'HEAT' and the temperature set at least 5 degrees above the current room "
                "temperature?"
            ),
            options=("Yes, it's set correctly", "No, I'll fix it now"),
            transitions=(Goto(1), Terminate("heating.thermostat")),
        ),
        # 1: POWER SWITCH
        Step(
            prompt=(
                "Next, let's check the furnace's power switch. It often looks like a light "
                "switch on or near the furnace unit. Is it in the 'ON' position?"
            ),
            options=("Yes, it's on", "No, it was off"),
            transitions=(Goto(2), Terminate("heating.power_switch")),
        ),
        # 2: IGNITION ATTEMPT (answer is read by the exhaust vent resolver)
        Step(
            prompt=(
                "When you try to start the heat, do you hear the furnace trying to ignite? "
                "Often there's a 'clicking' sound, or the main blower might run for a "
                "minute then stop."
            ),
            options=("Yes, it tries to start then stops", "No, it does absolutely nothing"),
            transitions=(Goto(3), Goto(3)),
        ),
        # 3: AIR FILTER
        Step(
            prompt=(
                "Have you checked the air filter recently? A clogged filter can cause a "
                "furnace to overheat and shut down, even after attempting to start."
            ),
            options=("Yes, it's clean", "No, it's dirty"),
            transitions=(Goto(4), Terminate("heating.dirty_filter")),
        ),
        # 4: EXHAUST VENT
        Step(
            prompt=(
                "Let's check the furnace's exhaust vent outside your home. Is it blocked by "
                "snow, leaves, or anything else?"
            ),
            options=("No, it's clear", "Yes, it was blocked"),
            transitions=(Terminate("heating.exhaust_vent"), Terminate("heating.exhaust_vent")),
        ),
    ),
)

# ==============================================================================
# ABNORMAL NOISE
# ==============================================================================

noise_flow = Flow(
    key=FlowKey.ABNORMAL_NOISE,
    title="Strange Noise",
    default_recommendation=DEFAULT_RECOMMENDATION,
    steps=(
        # 0: LOCATION
        Step(
            prompt="A strange noise can be unsettling. Where is the noise coming from?",
            options=(
                "Indoor Unit (Furnace/Air Handler)",
                "Outdoor Unit (AC/Heat Pump)",
                "In the vents",
            ),
            transitions=(Goto(1), Goto(1), Goto(1)),
        ),
        # 1: NOISE TYPE
        Step(
            prompt="What does the noise sound like?",
            options=(
                "Grinding / Scraping",
                "Squealing / Screeching",
                "Banging / Clanking",
                "Hissing",
            ),
            transitions=(
                Terminate("noise.noise_type"),
                Terminate("noise.noise_type"),
                Terminate("noise.noise_type"),
                Terminate("noise.noise_type"),
            ),
        ),
    ),
)

# ==============================================================================
# WATER LEAK
# ==============================================================================

# Water from the outdoor unit while cooling on a humid day is condensation.
# This is the only override in the built-in flows.
NORMAL_CONDENSATION = TerminalOverride(
    answer_prefix="AC",
    recommendation=Recommendation(
        text=(
            "A small puddle from the outdoor unit on a humid day is usually normal "
            "condensation and not a cause for alarm. If cooling performance is poor or "
            "the water seems excessive, then a check-up is a good idea."
        ),
        category=Category.MAINTENANCE,
    ),
)

leak_flow = Flow(
    key=FlowKey.WATER_LEAK,
    title="Water Leaking",
    default_recommendation=DEFAULT_RECOMMENDATION,
    overrides=(NORMAL_CONDENSATION,),
    steps=(
        # 0: SOURCE
        Step(
            prompt="I can help with a water leak. Where is the water coming from?",
            options=("From the indoor unit", "From the outdoor unit"),
            transitions=(Goto(1), Goto(2)),
        ),
        # 1: INDOOR DRAIN PAN
        Step(
            prompt=(
                "A leak from the indoor unit is often a clogged condensate drain line. For "
                "safety and to prevent damage, please turn your system OFF at the "
                "thermostat. Is the drain pan under the unit overflowing with water?"
            ),
            options=("Yes, it's full or overflowing", "No, but I see a leak"),
            transitions=(Terminate("leak.drain_pan"), Terminate("leak.drain_pan")),
        ),
        # 2: OUTDOOR OPERATING MODE
        Step(
            prompt=(
                "A little water from the outdoor unit can be normal. Are you running the AC "
                "on a hot, humid day, or are you running the Heat Pump in the winter?"
            ),
            options=("AC on a humid day", "Heat Pump in winter", "Neither / It's a lot of water"),
            transitions=(Terminate(), Goto(3), Goto(3)),
        ),
        # 3: ICE
        Step(
            prompt=(
                "If it's not normal condensation, it could be a sign of a problem. Is the "
                "unit encased in ice?"
            ),
            options=("Yes, there's a lot of ice", "No, just leaking water"),
            transitions=(Terminate("leak.frozen_unit"), Terminate("leak.frozen_unit")),
        ),
    ),
)

# ==============================================================================
# GENERIC FALLBACK
# ==============================================================================

fallback_flow = Flow(
    key=FlowKey.GENERIC_FALLBACK,
    title="General Troubleshooting",
    default_recommendation=DEFAULT_RECOMMENDATION,
    steps=(
        # 0: EQUIPMENT
        Step(
            prompt="Let's try to figure this out. What type of equipment is having an issue?",
            options=("Air Conditioner", "Furnace", "Heat Pump"),
            transitions=(Goto(1), Goto(1), Goto(1)),
        ),
        # 1: THERMOSTAT
        Step(
            prompt="Is the thermostat set correctly and does it have power/fresh batteries?",
            options=("Yes", "No / Unsure"),
            transitions=(Goto(2), Terminate("fallback.thermostat")),
        ),
        # 2: AIR FILTER
        Step(
            prompt="Have you checked if your air filter is clean?",
            options=("Yes, it's clean", "No, it's dirty"),
            transitions=(Terminate("fallback.filter_check"), Terminate("fallback.filter_check")),
        ),
    ),
)

HARDCODED_FLOWS = MappingProxyType({
    FlowKey.COOLING_FAILURE: cooling_flow,
    FlowKey.HEATING_FAILURE: heating_flow,
    FlowKey.ABNORMAL_NOISE: noise_flow,
    FlowKey.WATER_LEAK: leak_flow,
    FlowKey.GENERIC_FALLBACK: fallback_flow,
})
