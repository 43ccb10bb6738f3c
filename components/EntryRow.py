import streamlit as st

from logic.formatting import fmt_time


def render_energy_row(record):
    """
    History row for one energy entry: stars + description | time + emoji
    """
    col1, col2 = st.columns([3, 1])
    with col1:
        stars = "".join("★" if i <= record.rating else "☆" for i in range(1, 6))
        st.markdown(f"**{stars}**")
        st.caption(record.description)
    with col2:
        st.write(f"**{fmt_time(record.timestamp)}**")
        st.write(record.emoji)


def render_sleep_row(record):
    """
    History row for one sleep entry: hours + category / interruption / bedtime | time
    """
    col1, col2 = st.columns([3, 1])
    with col1:
        st.markdown(f"**{record.category_emoji} {record.formatted_hours}** ({record.category})")
        details = [f"{record.quality_emoji} {record.quality_description}"]
        if record.formatted_bedtime:
            details.append(f"🛏️ Bedtime {record.formatted_bedtime}")
        st.caption(" · ".join(details))
    with col2:
        st.write(f"**{fmt_time(record.timestamp)}**")
