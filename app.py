import streamlit as st

from planbuilder.branding.colors import (
    accessibility_score,
    color_palette,
    contrast_text_color,
    is_valid_hex_color,
)
from planbuilder.core import config, service
from planbuilder.export.brief import brief_sections
from planbuilder.export.formatters import format_currency
from planbuilder.llm.context_builder import build_form_context, build_plan_prompt
from planbuilder.llm.heuristics import project_data_from_reply
from planbuilder.pricing.cost import (
    DEFAULT_FEATURES,
    categories,
    filter_by_category,
    toggle_feature,
    total_cost,
)
from planbuilder.scoring.completion import TRACKED_FIELDS, merge_project_data
from planbuilder.steps.renderers import build_renderers

config.configure_logging()
SHOW_DEBUG = config.show_debug()


# MUST be first Streamlit call
st.set_page_config(
    page_title="Plan Builder",
    layout="wide",
    initial_sidebar_state="expanded",
)

# ---------- CSS (SAFE) ----------
st.markdown(
    """
<style>
.stApp {
  background:
    radial-gradient(1200px 600px at 50% -10%, rgba(37,99,235,0.18), rgba(11,11,15,0) 60%),
    radial-gradient(900px 500px at 80% 10%, rgba(16,185,129,0.12), rgba(11,11,15,0) 55%),
    linear-gradient(180deg, #0B0B0F 0%, #07070A 100%);
}

.block-container {
  padding-top: 1.0rem;
  max-width: 1150px;
}

section[data-testid="stSidebar"] {
  background: rgba(18, 18, 26, 0.65);
  backdrop-filter: blur(16px);
  border-right: 1px solid rgba(255,255,255,0.08);
}

/* ---------- HERO CARD ---------- */
.pb-hero {
  margin: 10px auto 18px auto;
  max-width: 980px;
  padding: 22px 18px 18px 18px;
  background: rgba(255,255,255,0.05);
  border: 1px solid rgba(255,255,255,0.10);
  border-radius: 22px;
  text-align: center;
}
.pb-hero h1 { margin: 0; font-size: 28px; }
.pb-hero p { margin: 8px 0 0 0; color: rgba(237,237,237,0.72); font-size: 14px; }
.pb-accent {
  width: 240px;
  height: 6px;
  margin: 16px auto 0 auto;
  border-radius: 999px;
  background: linear-gradient(90deg, #2563EB, rgba(16,185,129,0.75));
}

/* Tabs as pills */
div[data-testid="stTabs"] button {
  background: rgba(255,255,255,0.06) !important;
  border: 1px solid rgba(255,255,255,0.10) !important;
  border-radius: 999px !important;
  padding: 8px 14px !important;
  margin-right: 8px !important;
}
div[data-testid="stTabs"] button[aria-selected="true"] {
  background: rgba(37,99,235,0.22) !important;
  border-color: rgba(37,99,235,0.45) !important;
}

[data-testid="stMetricValue"] {
  color: #2563EB;
  font-weight: 900;
}
</style>
""",
    unsafe_allow_html=True,
)

# ---------- HERO HEADER ----------
st.markdown(
    """
<div class="pb-hero">
  <h1>Plan Builder</h1>
  <p>Scope your project step by step, then refine the plan with the assistant</p>
  <div class="pb-accent"></div>
</div>
""",
    unsafe_allow_html=True,
)


# ---------- Helpers ----------
def _notify(title: str, message: str):
    st.toast(f"**{title}:** {message}")


def _on_complete(form_data: dict):
    st.session_state["completed"] = form_data
    st.session_state["export"] = service.complete_and_export(
        form_data,
        fmt=st.session_state.get("export_fmt", "docx"),
        estimate=st.session_state["estimate"],
    )
    st.session_state["handoff_pending"] = True


def _init_session():
    st.session_state["wizard"] = service.build_wizard(_on_complete)
    st.session_state["assistant"] = service.build_assistant(notify=_notify)
    st.session_state["estimate"] = list(DEFAULT_FEATURES)
    st.session_state["project_data"] = {}
    st.session_state["completed"] = None
    st.session_state["export"] = None
    st.session_state["handoff_pending"] = False


def _system_prompt(form_data: dict):
    context = build_form_context(form_data)
    if not context:
        return None
    return "You are a project planning assistant. What the user has told us so far:\n" + context


def _send(content: str):
    wizard = st.session_state["wizard"]
    assistant = st.session_state["assistant"]
    data = assistant.send_message(
        content,
        system_prompt=_system_prompt(wizard.form_data),
        form_context=wizard.form_data,
    )
    if data is None:
        return
    update = project_data_from_reply(str(data.get("response") or ""))
    if update:
        st.session_state["project_data"] = merge_project_data(st.session_state["project_data"], update)


# ---------- Session init ----------
if "wizard" not in st.session_state:
    _init_session()

wizard = st.session_state["wizard"]
assistant = st.session_state["assistant"]
renderers = build_renderers(on_edit=wizard.edit_section)

# ---------- Sidebar ----------
with st.sidebar:
    if SHOW_DEBUG:
        st.header("Status")
        st.write(f"**USE_ASSISTANT:** `{config.use_assistant()}`")
        st.write(f"**Conversation:** `{assistant.conversation_id}`")
        st.divider()

    st.subheader("Progress")
    for i, step in enumerate(wizard.steps):
        done = wizard.is_complete(step.key)
        label = f"{'✓' if done else '○'} {step.label}"
        if st.button(label, key=f"nav_{step.key}", disabled=i == wizard.state.current_step_index):
            if wizard.jump_to(i):
                st.rerun()

    st.divider()
    st.radio("Export format", ["docx", "txt"], horizontal=True, key="export_fmt")

    if st.button("Start Over", type="primary"):
        wizard.reset()
        _init_session()
        st.rerun()


# ---------- Tabs ----------
if SHOW_DEBUG:
    tab_wizard, tab_chat, tab_estimate, tab_brand, tab_state = st.tabs(
        ["Wizard", "Assistant", "Estimate", "Branding", "State"]
    )
else:
    tab_wizard, tab_chat, tab_estimate, tab_brand = st.tabs(["Wizard", "Assistant", "Estimate", "Branding"])


with tab_wizard:
    st.progress(int(wizard.progress_percentage), text=f"Step {wizard.state.current_step_index + 1} of {len(wizard.steps)}")

    step = wizard.current_step
    renderers[step.kind].render(
        wizard.form_data,
        lambda partial: wizard.update_section(step.key, partial),
        lambda ok: wizard.mark_step_complete(step.key, ok),
    )

    st.divider()
    c1, _, c3 = st.columns([1, 3, 1])
    with c1:
        if st.button("Back", disabled=wizard.is_first_step):
            wizard.retreat()
            st.rerun()
    with c3:
        if wizard.is_last_step:
            if st.button("Complete", type="primary"):
                wizard.complete()
                st.rerun()
        elif st.button("Next", type="primary", disabled=not wizard.can_advance):
            wizard.advance()
            st.rerun()

    exported = st.session_state.get("export")
    if exported:
        st.success(f"Plan saved ({exported['format'].upper()}): {exported['path']}")


with tab_chat:
    if st.session_state.get("handoff_pending") and st.session_state.get("completed"):
        st.session_state["handoff_pending"] = False
        with st.spinner("Sending your answers to the assistant..."):
            _send(build_plan_prompt(st.session_state["completed"]))

    left, right = st.columns([3, 1])

    with left:
        for turn in assistant.transcript:
            with st.chat_message(turn.role):
                st.markdown(turn.content)

        user_msg = st.chat_input("Ask about your plan...", disabled=assistant.is_loading)
        if user_msg:
            with st.spinner("Thinking..."):
                _send(user_msg)
            st.rerun()

        if assistant.error and SHOW_DEBUG:
            st.caption(assistant.error)

    with right:
        project = st.session_state.get("project_data") or {}
        st.subheader("Plan Overview")
        st.metric("Completeness", f"{project.get('completionPercentage', 0)}%")
        for name in TRACKED_FIELDS:
            marker = "★ " if project.get("lastUpdatedField") == name else ""
            st.write(f"{marker}{'✓' if project.get(name) else '○'} {name}")
        if st.button("Clear Chat"):
            assistant.clear()
            st.session_state["project_data"] = {}
            st.rerun()


with tab_estimate:
    st.subheader("Feature Estimate")
    estimate = st.session_state["estimate"]

    category = st.selectbox("Category", ["All"] + categories(estimate))
    for f in filter_by_category(estimate, category):
        picked = st.checkbox(
            f"{f.name} ({format_currency(f.base_cost)})",
            value=f.selected,
            help=f.description,
            key=f"est_{f.id}",
        )
        if picked != f.selected:
            st.session_state["estimate"] = toggle_feature(st.session_state["estimate"], f.id)
            st.rerun()

    st.metric("Estimated total", format_currency(total_cost(st.session_state["estimate"])))

    with st.expander("Plan brief preview"):
        for title, items in brief_sections(wizard.form_data, estimate=st.session_state["estimate"]):
            st.markdown(f"**{title}**")
            if items:
                st.markdown("\n".join(f"- {item}" for item in items))
            else:
                st.caption("(not provided)")


with tab_brand:
    st.subheader("Brand Colors")
    primary = st.color_picker("Primary color", "#2563EB")
    text_on_primary = contrast_text_color(primary)

    st.markdown(
        f'<div style="background:{primary};color:{text_on_primary};padding:18px;border-radius:14px;">'
        f"Sample heading on your primary color</div>",
        unsafe_allow_html=True,
    )

    if is_valid_hex_color(primary):
        palette = color_palette(primary)
        cols = st.columns(len(palette))
        for col, (name, value) in zip(cols, palette.items()):
            with col:
                st.markdown(
                    f'<div style="background:{value};color:{contrast_text_color(value)};'
                    f'padding:14px 6px;border-radius:10px;text-align:center;font-size:12px;">{name}<br>{value}</div>',
                    unsafe_allow_html=True,
                )
        score = accessibility_score("#FFFFFF", primary)
        st.metric("White text accessibility", f"{score}/5")


if SHOW_DEBUG:
    with tab_state:
        st.subheader("Wizard State (Debug)")
        st.json(
            {
                "current_step": wizard.current_step.key,
                "completion": dict(wizard.state.completion),
                "form_data": wizard.form_data,
            }
        )
