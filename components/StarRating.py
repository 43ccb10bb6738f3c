import streamlit as st


def render_star_rating(selected, key_prefix="star", disabled=False):
    """
    Five star buttons. Stars up to `selected` are drawn filled.

    Returns:
        int | None: the rating tapped on this run, or None
    """
    tapped = None
    cols = st.columns(5)
    for rating, col in zip(range(1, 6), cols):
        with col:
            label = "⭐" if rating <= selected else "☆"
            if st.button(label, key=f"{key_prefix}_{rating}", help=f"{rating} / 5",
                         disabled=disabled, use_container_width=True):
                tapped = rating
    return tapped
