"""
Streamlit Dashboard — Shape Field sketch

Two-panel layout:
  A) Field — the rendered pass for the current settings and seed
  B) Settings — active parameter listing + a strip of seed variations

Sidebar: grid/shape/inset controls, both palettes, seed + Reseed trigger.
"""

from __future__ import annotations

import random

import streamlit as st

from config import settings, configure_logging
from generator.color import rgb_to_hex
from generator.state import ShapeKind
from sketch import SketchController

SEED_INPUT_MAX = 2**53 - 1

configure_logging()

# ── Page Config ──────────────────────────────────────────────────────
st.set_page_config(
    page_title="Shape Field",
    page_icon="🟠",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ── Custom CSS ───────────────────────────────────────────────────────
st.markdown("""
<style>
    .main-header {
        background: linear-gradient(135deg, #0f0c29, #302b63, #24243e);
        padding: 1.5rem 2rem;
        border-radius: 12px;
        margin-bottom: 1.5rem;
        color: white;
    }

    .main-header h1 {
        margin: 0;
        font-size: 1.8rem;
        font-weight: 700;
    }

    .main-header p {
        margin: 0.3rem 0 0 0;
        color: #94a3b8;
        font-size: 0.9rem;
    }

    .panel-title {
        color: #cdd6f4;
        font-size: 0.85rem;
        font-weight: 600;
        text-transform: uppercase;
        letter-spacing: 0.05em;
        margin-bottom: 0.75rem;
    }

    .param-table {
        width: 100%;
        font-size: 0.8rem;
    }

    .param-table td {
        padding: 0.25rem 0.4rem;
        border-bottom: 1px solid #313244;
    }

    .param-name { color: #89b4fa; font-family: monospace; }
    .param-value { color: #cdd6f4; text-align: right; }
</style>
""", unsafe_allow_html=True)


# ── Session State Initialization ─────────────────────────────────────

def init_session_state():
    """Initialize all Streamlit session state variables."""
    defaults = {
        "controller": None,
        "show_variations": False,
        "error_message": None,
        "last_seed_input": None,
    }
    for key, val in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = val
    if st.session_state.controller is None:
        st.session_state.controller = SketchController()


init_session_state()
controller: SketchController = st.session_state.controller
params = controller.state.params


# ── Header ───────────────────────────────────────────────────────────

st.markdown("""
<div class="main-header">
    <h1>Shape Field</h1>
    <p>Seeded grid of circles and squares with jittered palettes and inset rings</p>
</div>
""", unsafe_allow_html=True)


# ── Sidebar ──────────────────────────────────────────────────────────

def palette_controls(kind: ShapeKind):
    """Color pickers, enable flags and jitter sliders for one palette."""
    palette = params.palette_for(kind)
    cols = st.columns(4)
    for i, col in enumerate(cols):
        with col:
            color = st.color_picker(
                f"Slot {i + 1}",
                rgb_to_hex(palette.colors[i]),
                key=f"{kind.value}_color_{i}",
            )
            enabled = st.checkbox("On", palette.enabled[i], key=f"{kind.value}_on_{i}")
            if color != rgb_to_hex(palette.colors[i]) or enabled != palette.enabled[i]:
                controller.set_palette_slot(kind, i, color=color, enabled=enabled)

    h = st.slider("Hue jitter", 0.0, 1.0, palette.h_jitter, 0.01, key=f"{kind.value}_h")
    s = st.slider("Saturation jitter", 0.0, 1.0, palette.s_jitter, 0.01, key=f"{kind.value}_s")
    v = st.slider("Value jitter", 0.0, 1.0, palette.v_jitter, 0.01, key=f"{kind.value}_v")
    controller.set_jitter(kind, h=h, s=s, v=v)


def apply(name, value):
    """Route a widget value through the controller, surfacing rejections."""
    result = controller.set_variable(name, value)
    if '"error"' in result:
        st.session_state.error_message = result


with st.sidebar:
    st.markdown("### 🔲 Grid")
    apply("grid_count_x", st.slider("Columns", 1, 100, params.grid_count_x))
    apply("grid_count_y", st.slider("Rows", 1, 100, params.grid_count_y))

    st.markdown("### ⚪ Shapes")
    apply("base_size", st.slider("Base size", 0.05, 3.0, params.base_size, 0.05))
    apply("max_scale", st.slider("Max scale", 1.0, 5.0, params.max_scale, 0.05))
    apply("pct_circles", st.slider("Circles", 0.0, 1.0, params.pct_circles, 0.01))
    apply("alpha", st.slider("Alpha", 0, 255, params.alpha))

    st.markdown("### ◎ Insets")
    apply("inset_count", st.slider("Inset count", 1, 20, params.inset_count))
    apply("fixed_inset_count", st.checkbox("Fixed inset count", params.fixed_inset_count))
    apply("inversed_radii", st.checkbox("Inversed radii", params.inversed_radii))

    with st.expander("Circle palette", expanded=False):
        palette_controls(ShapeKind.CIRCLE)
    with st.expander("Square palette", expanded=False):
        palette_controls(ShapeKind.SQUARE)

    st.divider()
    st.markdown("### 🎲 Seed")
    # number_input only holds JS-safe integers; larger seeds show clamped
    shown_seed = min(params.rng_seed, SEED_INPUT_MAX)
    seed_value = int(st.number_input(
        "Seed", min_value=0, max_value=SEED_INPUT_MAX, value=shown_seed, step=1,
    ))
    if shown_seed != params.rng_seed:
        st.caption(f"Current seed: {params.rng_seed}")
    # Only an edit of the widget itself reseeds.
    if seed_value != shown_seed and seed_value != st.session_state.last_seed_input:
        controller.reseed(seed_value)
    st.session_state.last_seed_input = seed_value

    col1, col2 = st.columns(2)
    with col1:
        reseed_btn = st.button("🎲 Reseed", width="stretch", type="primary")
    with col2:
        variations_btn = st.button(
            "Hide variations" if st.session_state.show_variations else "Variations",
            width="stretch",
        )


# ── Button Logic ─────────────────────────────────────────────────────

if reseed_btn:
    controller.reseed(random.getrandbits(53))
    st.rerun()

if variations_btn:
    st.session_state.show_variations = not st.session_state.show_variations
    st.rerun()


# ── Main Panels ──────────────────────────────────────────────────────

panel_a, panel_b = st.columns([1.4, 1])

with panel_a:
    st.markdown('<div class="panel-title">🖼️ Field</div>', unsafe_allow_html=True)
    try:
        image = controller.redraw()
        field_state = controller.state.latest_field
        st.image(
            image,
            caption=f"Seed {field_state.seed} · {len(field_state.primitives)} primitives",
            width="stretch",
        )
    except Exception as e:
        import traceback
        traceback.print_exc()
        msg = str(e)
        if not msg:
            msg = f"{type(e).__name__}: {e}"
        st.session_state.error_message = msg

with panel_b:
    st.markdown('<div class="panel-title">📋 Active Settings</div>', unsafe_allow_html=True)
    rows = "".join(
        f'<tr><td class="param-name">{k}</td><td class="param-value">{v}</td></tr>'
        for k, v in params.to_dict().items()
        if not isinstance(v, dict)
    )
    st.markdown(f'<table class="param-table">{rows}</table>', unsafe_allow_html=True)

    if st.session_state.show_variations:
        st.markdown('<div class="panel-title">🎲 Next Seeds</div>', unsafe_allow_html=True)
        variations = controller.variations(n=settings.NUM_VARIATIONS)
        thumbs = st.columns(2)
        for i, (state, thumb) in enumerate(variations):
            with thumbs[i % 2]:
                st.image(thumb, caption=f"Seed {state.seed}", width="stretch")


# Show errors
if st.session_state.error_message:
    st.error(f"⚠️ {st.session_state.error_message}")
    st.session_state.error_message = None
