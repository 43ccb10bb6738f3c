import streamlit as st
import io
import logging
import socket
from datetime import timedelta
import qrcode

# --- Imports (Logic) ---
try:
    from logic.config import (
        APP_PORT, BEDTIME_STEP_MINUTES, DEFAULT_BEDTIME, DEFAULT_SLEEP_HOURS,
        MAX_SLEEP_HOURS_OPTION, resolve_data_path,
    )
    from logic.models import Interruption, RecordKind, ValidationError
    from logic.record_store import RecordStore, StoreError
    from logic.duplicate_guard import (
        ConflictFound, Inserted, Resolution, propose_energy_entry, propose_sleep_entry,
    )
    from logic.history import get_history
    from logic.summary import get_summary
    from logic.feedback import SavedBanner
    from logic.export import records_to_dataframe
    from logic.formatting import (
        energy_duplicate_message, energy_feedback_message, fmt_time,
        sleep_duplicate_message, sleep_feedback_message,
    )
    from components.StarRating import render_star_rating
    from components.EntryRow import render_energy_row, render_sleep_row
    from components.StatCard import render_stat_card, render_insight_card
    from components.TrendChart import render_trend_chart
except ImportError as e:
    st.error(f"Modules not found: {e}")
    st.stop()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("myspark")

# --- Page Config ---
st.set_page_config(
    page_title="MySpark | Energy & Sleep",
    page_icon="⚡",
    layout="centered",
    initial_sidebar_state="auto",
    menu_items={
        'Get Help': None,
        'Report a bug': None,
        'About': "MySpark - personal energy & sleep logger"
    }
)

# --- CSS Styling ---
st.markdown("""
<style>
    .block-container {
        padding-top: 1rem;
        padding-bottom: 2rem;
    }
    .spark-card {
        background: rgba(128,128,128,0.06);
        border-radius: 12px;
        padding: 1rem;
        margin-bottom: 0.8rem;
        border: 1px solid rgba(128,128,128,0.15);
        text-align: center;
    }
    .spark-card h3 {
        font-size: 0.85rem;
        margin: 0.3rem 0 0 0;
        font-weight: 500;
        opacity: 0.75;
    }
    .spark-card .spark-icon {
        font-size: 1.6rem;
    }
    .spark-card .spark-value {
        font-size: 2rem;
        font-weight: 700;
        line-height: 1.1;
    }
    .spark-card .spark-sub {
        font-size: 0.8rem;
        opacity: 0.7;
    }
    .spark-insight {
        text-align: left;
    }
    @media (max-width: 768px) {
        .spark-card .spark-value {
            font-size: 1.6rem;
        }
    }
</style>
""", unsafe_allow_html=True)


# --- Store ---
@st.cache_resource
def get_store():
    path = resolve_data_path()
    logger.info(f"Using record store {path}")
    return RecordStore(path)


store = get_store()

# --- Session State ---
SLEEP_HOUR_OPTIONS = [x / 2 for x in range(int(MAX_SLEEP_HOURS_OPTION * 2), -1, -1)]
INTERRUPTION_CHOICES = ["Yes", "No", "Skip"]

defaults = {
    'energy_selected': 0,
    'energy_conflict': None,
    'energy_banner': SavedBanner(),
    'sleep_conflict': None,
    'sleep_banner': SavedBanner(),
    'sleep_form_reset_pending': False,
    'sleep_hours': DEFAULT_SLEEP_HOURS,
    'sleep_interruption': "Skip",
    'sleep_include_bedtime': False,
    'sleep_bedtime': DEFAULT_BEDTIME,
}
for key, value in defaults.items():
    if key not in st.session_state:
        st.session_state[key] = value


def reset_sleep_form():
    st.session_state.sleep_hours = DEFAULT_SLEEP_HOURS
    st.session_state.sleep_interruption = "Skip"
    st.session_state.sleep_include_bedtime = False
    st.session_state.sleep_bedtime = DEFAULT_BEDTIME


@st.fragment(run_every=1)
def render_saved_banner(banner_key, form_key):
    """
    Shows the saved message until its deadline, then hides it and clears the
    form selection. Polled every second so nothing waits on the user.
    """
    banner = st.session_state[banner_key]
    if banner.reset_if_expired():
        if form_key == 'energy':
            st.session_state.energy_selected = 0
        else:
            # widget values can only change before the widgets are drawn
            st.session_state.sleep_form_reset_pending = True
        st.rerun()
    if banner.is_visible():
        st.success(banner.message)


def handle_outcome(outcome, conflict_key, banner_key, message_fn):
    if isinstance(outcome, ConflictFound):
        st.session_state[conflict_key] = outcome
    elif isinstance(outcome, Inserted):
        st.session_state[banner_key].show(message_fn(outcome.record))


def resolve_conflict(conflict_key, choice, banner_key, message_fn, on_cancel):
    conflict = st.session_state[conflict_key]
    try:
        outcome = conflict.resolve(choice)
    except StoreError as e:
        # conflict stays open so the user can retry or cancel
        logger.error(f"Replacing {conflict.kind.value} entry failed: {e}")
        st.session_state['last_error'] = f"❌ Could not save your entry: {e}"
        return
    st.session_state[conflict_key] = None
    if isinstance(outcome, Inserted):
        st.session_state[banner_key].show(message_fn(outcome.record))
    else:
        on_cancel()


def load_records(kind):
    try:
        return store.query_all(kind)
    except StoreError as e:
        logger.error(f"Loading {kind.value} records failed: {e}")
        st.error(f"❌ Could not read your data: {e}")
        return []


def render_recent_debug(records, row_fn):
    with st.expander("🛠️ Recent Entries (Debug)"):
        recent = sorted(records, key=lambda r: r.timestamp)[-3:]
        if not recent:
            st.caption("No entries yet.")
        for record in recent:
            when = "Today" if record.is_from_today() else f"{record.timestamp:%b} {record.timestamp.day}"
            st.caption(f"{when} · {row_fn(record)}")


# --- Navigation ---
PAGES = ["⚡ Energy", "😴 Sleep", "📋 History", "📊 Summary"]

if 'current_page' not in st.session_state:
    st.session_state.current_page = PAGES[0]

with st.sidebar:
    st.title("MySpark")
    selection = st.radio("Go to", PAGES, key="current_page")

    st.divider()
    st.caption(f"💾 Data file: `{store.path}`")

    st.divider()
    st.markdown("### 📱 Open on your phone")
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        s.connect(('8.8.8.8', 80))
        local_ip = s.getsockname()[0]
        s.close()
    except OSError:
        local_ip = '127.0.0.1'
    app_url = f"http://{local_ip}:{APP_PORT}"
    qr_img = qrcode.make(app_url)
    buf = io.BytesIO()
    qr_img.save(buf, format='PNG')
    buf.seek(0)
    st.image(buf, caption="Scan with your camera", width=200)
    st.code(app_url, language=None)

if st.session_state.get('last_error'):
    st.error(st.session_state.pop('last_error'))


# ---------------------------------------------------------
# TAB 1: ENERGY LOG
# ---------------------------------------------------------
if selection == "⚡ Energy":
    st.title("⚡ MySpark")
    st.caption("Designed with ❤️ by David Zhang")

    st.subheader("How's your energy right now?")
    st.caption("Tap a star to rate your energy level")

    conflict = st.session_state.energy_conflict
    tapped = render_star_rating(
        st.session_state.energy_selected,
        key_prefix="energy_star",
        disabled=conflict is not None,
    )

    if tapped:
        st.session_state.energy_selected = tapped
        try:
            outcome = propose_energy_entry(store, tapped)
        except ValidationError as e:
            logger.warning(f"Rejected energy rating {tapped}: {e}")
        except StoreError as e:
            logger.error(f"Saving energy entry failed: {e}")
            st.session_state.energy_selected = 0
            st.session_state['last_error'] = f"❌ Could not save your entry: {e}"
        else:
            handle_outcome(outcome, 'energy_conflict', 'energy_banner', energy_feedback_message)
        st.rerun()

    # --- Duplicate Entry Alert ---
    if conflict is not None:
        st.warning(
            "**Recent Entry Found**\n\n"
            + energy_duplicate_message(conflict.candidate, conflict.pending['rating'])
        )
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Replace", type="primary", use_container_width=True):
                resolve_conflict(
                    'energy_conflict', Resolution.REPLACE, 'energy_banner',
                    energy_feedback_message, on_cancel=lambda: None,
                )
                st.rerun()
        with col2:
            if st.button("Cancel", use_container_width=True):
                def _clear_selection():
                    st.session_state.energy_selected = 0
                resolve_conflict(
                    'energy_conflict', Resolution.CANCEL, 'energy_banner',
                    energy_feedback_message, on_cancel=_clear_selection,
                )
                st.rerun()

    render_saved_banner('energy_banner', 'energy')

    render_recent_debug(
        load_records(RecordKind.ENERGY),
        lambda r: f"{r.emoji} {r.description} - {fmt_time(r.timestamp)}",
    )


# ---------------------------------------------------------
# TAB 2: SLEEP LOG
# ---------------------------------------------------------
elif selection == "😴 Sleep":
    st.title("😴 Sleep Tracker")
    st.caption("Log your sleep from last night")

    if st.session_state.sleep_form_reset_pending:
        reset_sleep_form()
        st.session_state.sleep_form_reset_pending = False

    conflict = st.session_state.sleep_conflict
    form_locked = conflict is not None

    st.subheader("How many hours did you sleep?")
    hours = st.selectbox(
        "Hours",
        SLEEP_HOUR_OPTIONS,
        key="sleep_hours",
        format_func=lambda h: f"{h:.1f} hours",
        disabled=form_locked,
    )

    st.subheader("Was your sleep interrupted?")
    interruption_label = st.radio(
        "Interrupted",
        INTERRUPTION_CHOICES,
        key="sleep_interruption",
        horizontal=True,
        label_visibility="collapsed",
        disabled=form_locked,
    )

    include_bedtime = st.toggle("Include bedtime", key="sleep_include_bedtime", disabled=form_locked)
    bedtime = None
    if include_bedtime:
        bedtime = st.time_input(
            "What time did you fall asleep?",
            key="sleep_bedtime",
            step=timedelta(minutes=BEDTIME_STEP_MINUTES),
            disabled=form_locked,
        )

    # 0 hours is a valid record but not something to log from this form
    can_save = hours > 0 and not form_locked
    if st.button("Log Sleep", type="primary", disabled=not can_save, use_container_width=True):
        try:
            outcome = propose_sleep_entry(
                store,
                hours,
                was_interrupted=Interruption.from_choice(interruption_label),
                bedtime=bedtime,
            )
        except ValidationError as e:
            logger.warning(f"Rejected sleep entry: {e}")
            st.session_state['last_error'] = f"⚠️ {e}"
        except StoreError as e:
            logger.error(f"Saving sleep entry failed: {e}")
            st.session_state['last_error'] = f"❌ Could not save your entry: {e}"
        else:
            handle_outcome(outcome, 'sleep_conflict', 'sleep_banner', sleep_feedback_message)
        st.rerun()

    # --- Duplicate Entry Alert ---
    if conflict is not None:
        st.warning("**Recent Entry Found**\n\n" + sleep_duplicate_message(conflict.candidate))
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Replace", type="primary", use_container_width=True):
                resolve_conflict(
                    'sleep_conflict', Resolution.REPLACE, 'sleep_banner',
                    sleep_feedback_message, on_cancel=lambda: None,
                )
                st.rerun()
        with col2:
            if st.button("Cancel", use_container_width=True):
                resolve_conflict(
                    'sleep_conflict', Resolution.CANCEL, 'sleep_banner',
                    sleep_feedback_message, on_cancel=lambda: None,
                )
                st.rerun()

    render_saved_banner('sleep_banner', 'sleep')

    render_recent_debug(
        load_records(RecordKind.SLEEP),
        lambda r: (
            f"{r.category_emoji} {r.formatted_hours}"
            + (f" {r.quality_emoji}" if r.was_interrupted is not Interruption.UNSPECIFIED else "")
            + f" - {fmt_time(r.timestamp)}"
        ),
    )


# ---------------------------------------------------------
# TAB 3: HISTORY
# ---------------------------------------------------------
elif selection == "📋 History":
    st.header("📋 History")
    kind_label = st.radio("Show", ["Energy", "Sleep"], horizontal=True, key="history_kind")
    kind = RecordKind.ENERGY if kind_label == "Energy" else RecordKind.SLEEP

    records = load_records(kind)
    sections = get_history(records)

    if not sections:
        st.markdown(f"### No {kind.title} Logs Yet")
        st.caption(f"Start logging your {kind.title.lower()} to see your history here")
    else:
        row_fn = render_energy_row if kind is RecordKind.ENERGY else render_sleep_row
        for label, day_records in sections:
            st.subheader(label)
            for record in day_records:
                row_fn(record)
            st.divider()

        csv_bytes = records_to_dataframe(records, kind).to_csv(index=False).encode('utf-8')
        st.download_button(
            "⬇️ Download CSV",
            data=csv_bytes,
            file_name=f"myspark_{kind.value}.csv",
            mime="text/csv",
            use_container_width=True,
        )


# ---------------------------------------------------------
# TAB 4: SUMMARY
# ---------------------------------------------------------
elif selection == "📊 Summary":
    st.header("📊 Summary")
    kind_label = st.radio("Show", ["Energy", "Sleep"], horizontal=True, key="summary_kind")
    kind = RecordKind.ENERGY if kind_label == "Energy" else RecordKind.SLEEP

    records = load_records(kind)

    if not records:
        st.markdown("### No Data to Analyze")
        st.caption(f"Log some {kind.title.lower()} entries to see your patterns and trends")
    else:
        if kind is RecordKind.ENERGY:
            summary = get_summary(records, "rating")
            avg_text, avg_sub, y_title, y_range = f"{summary.mean:.1f}", "⭐ energy", "Energy", (1, 5)
        else:
            summary = get_summary(records, "hours_slept")
            avg_text, avg_sub, y_title, y_range = f"{summary.mean:.1f}", "hours of sleep", "Hours", None

        col_a, col_b = st.columns(2)
        with col_a:
            render_stat_card("This Week", str(summary.count), "entries", "🗓️")
        with col_b:
            render_stat_card("Average", avg_text, avg_sub, "📈")

        if summary.trend:
            st.markdown(f"#### {kind.title} Over Time")
            render_trend_chart(summary.trend, y_title, y_range)
        else:
            st.info("No entries in the last 7 days.")

        if kind is RecordKind.ENERGY:
            st.markdown("#### Insights")
            render_insight_card(summary.insight)
