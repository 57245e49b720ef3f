from decision_tree.domain.models import Answer, DecisionTree, Step, SummaryEntry

# ==============================================================================
# STEP DEFINITIONS
# ==============================================================================

# --- STEP 1: ENTRY QUESTION ---
start = Step(
    id="start",
    title="Is your heating working at all?",
    answers=[
        Answer(target="no_heat", data_key="no", label="No, the radiators are cold"),
        Answer(target="some_heat", data_key="partly", label="Some rooms are warm, some are not"),
    ],
)

# --- STEP 2a: NO HEAT AT ALL ---
no_heat = Step(
    id="no_heat",
    title="Is the boiler display showing an error code?",
    info="The boiler is not producing any heat.",
    answers=[
        Answer(target="error_code", data_key="error", label="Yes, there is a code"),
        Answer(target="pressure", data_key="no-error", label="No, the display looks normal"),
    ],
)

# --- STEP 2b: PARTIAL HEAT ---
some_heat = Step(
    id="some_heat",
    title="Are the cold radiators warm at the bottom but cold at the top?",
    info="Only part of the system is heating.",
    answers=[
        Answer(target="bleed", data_key="cold-top", label="Yes, cold at the top"),
        Answer(target="pressure", data_key="cold-everywhere", label="No, cold everywhere"),
    ],
)

# --- STEP 3: PRESSURE CHECK ---
pressure = Step(
    id="pressure",
    title="Is the pressure gauge below 1 bar?",
    info="The system pressure was checked.",
    answers=[
        Answer(target="low_pressure", data_key="low", label="Yes, below 1 bar"),
        Answer(target="engineer", data_key="normal", label="No, between 1 and 2 bar"),
    ],
)

# --- TERMINAL STEPS ---
error_code = Step(
    id="error_code",
    title="Note down the error code",
    info="The boiler reported an error code.",
    cookie="heating_error_code",
)

bleed = Step(
    id="bleed",
    title="Bleed the radiators",
    info="Air is trapped in the radiators.",
)

low_pressure = Step(
    id="low_pressure",
    title="Repressurise the system",
    info="The system pressure is too low.",
    # Still offers a way forward, but the advice so far is already useful
    show_summary=True,
    answers=[
        Answer(target="engineer", data_key="still-broken", label="I repressurised it and it still does not work"),
    ],
)

engineer = Step(
    id="engineer",
    title="Contact a Gas Safe registered engineer",
    info="The fault needs a qualified engineer.",
    cookie="heating_needs_engineer",
)

# ==============================================================================
# TREE DEFINITIONS
# ==============================================================================

heating_help = DecisionTree(
    id="heating_help",
    title="Why is my heating not working?",
    steps={
        s.id: s
        for s in [start, no_heat, some_heat, pressure, error_code, bleed, low_pressure, engineer]
    },
    summary=[
        SummaryEntry(
            id="manual",
            text="Check your boiler manual for what the error code means.",
            pass_filter="error_code",
        ),
        SummaryEntry(
            id="bleed_key",
            text="You will need a radiator key and an old towel.",
            pass_filter="bleed",
        ),
        SummaryEntry(
            id="filling_loop",
            text="Open the filling loop until the gauge reads 1.5 bar.",
            pass_filter="pressure low_pressure",
            stop_filter="engineer",
        ),
        SummaryEntry(
            id="book_engineer",
            text="Book an engineer and tell them what you have already checked.",
            pass_filter="engineer",
        ),
        SummaryEntry(
            id="landlord",
            text="If you rent, report the fault to your landlord.",
            pass_filter="no_heat, engineer",
        ),
        SummaryEntry(
            id="warm",
            text="Keep warm: use a safe electric heater in the meantime.",
            stop_filter="bleed, low_pressure",
        ),
    ],
)

SAMPLE_TREES = {
    "heating_help": heating_help,
}
