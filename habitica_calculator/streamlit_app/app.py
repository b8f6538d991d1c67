"""
Habitica Party Damage Calculator - Streamlit Web App
Upload or pick a party file and see the best buff plan for the party.

Run with:
    streamlit run habitica_calculator/streamlit_app/app.py
"""
import io

import streamlit as st

from habitica_calculator.buff_optimizer import calculate_max_party_damage, calculate_max_single_damage
from habitica_calculator.exceptions import CalculatorError
from habitica_calculator.job_classes import get_display_name, get_hex_color
from habitica_calculator.party_io import find_party_files, find_repo_root, parse_party, read_party
from habitica_calculator.streamlit_app.utils.damage_chart import create_party_damage_chart

# Page config
st.set_page_config(
    page_title="Habitica Party Damage Calculator",
    page_icon="⚔️",
    layout="wide",
)

# Custom CSS for dark theme
st.markdown("""
<style>
    .stApp {
        background-color: #1a1a2e;
    }
    .main-title {
        color: #a993ed;
        font-size: 2.5em;
        font-weight: bold;
        text-align: center;
        margin-bottom: 20px;
    }
    .sub-title {
        color: #888;
        text-align: center;
        margin-bottom: 30px;
    }
    .player-name {
        font-size: 1.1em;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)


def load_party():
    """Party from an uploaded file, or from a party file found in the repository."""
    with st.sidebar:
        st.markdown("### Party File")
        uploaded = st.file_uploader("Upload party CSV", type=["csv"])
        skip_invalid = st.checkbox("Skip invalid players", value=False)

        if uploaded is not None:
            text = io.StringIO(uploaded.getvalue().decode("utf-8"))
            return parse_party(text, source=uploaded.name, skip_invalid=skip_invalid)

        candidates = find_party_files(find_repo_root())
        if not candidates:
            st.info("No party files found. Upload one to get started.")
            return []

        selected = st.selectbox("Or choose a party file", candidates, format_func=str)
        return read_party(selected, skip_invalid=skip_invalid)


def player_header(player) -> str:
    color = get_hex_color(player)
    return (f'<span class="player-name" style="color: {color}">{player.name}</span> '
            f'({get_display_name(player.kind)}, level {player.level}: '
            f'{player.attack_spell} / {player.buff_spell})')


def main():
    """Main entry point."""
    st.markdown('<div class="main-title">⚔️ Habitica Party Damage Calculator</div>', unsafe_allow_html=True)
    st.markdown('<div class="sub-title">How many buffs should everyone cast today?</div>',
                unsafe_allow_html=True)

    try:
        party = load_party()
    except CalculatorError as e:
        st.error(e.message)
        st.stop()

    if not party:
        st.stop()

    verbose = st.sidebar.toggle("Verbose output", value=False)

    optimum = calculate_max_party_damage(party)

    # Quick overview
    cols = st.columns(len(party) + 1)
    with cols[0]:
        st.metric("Max Party Damage", f"{optimum.damage:.1f}")
    for col, member in zip(cols[1:], optimum.members):
        with col:
            st.metric(f"{member.player.name} buffs", member.num_buffs)

    st.plotly_chart(create_party_damage_chart(optimum), use_container_width=True)

    st.dataframe(
        [
            {
                "Player": m.player.name,
                "Class": get_display_name(m.player.kind),
                "Buffs Cast": m.num_buffs,
                "Attacks": m.attack.num_attacks,
                "Task Damage": round(m.task_damage, 1),
                "Attack Damage": round(m.attack.total, 1),
                "Total": round(m.total, 1),
            }
            for m in optimum.members
        ],
        use_container_width=True,
        hide_index=True,
    )
    st.caption(f"Total Buff = {optimum.total_buff}")

    st.divider()
    st.markdown("### Single Attacker")
    st.markdown("Best damage for each player if everyone else casts every buff they can afford.")

    for player in party:
        single = calculate_max_single_damage(player, party)
        st.markdown(player_header(player), unsafe_allow_html=True)
        st.write(single.summary())
        if verbose:
            st.code(single.explain())
            st.code(single.attack.breakdown())

    if verbose:
        st.divider()
        st.markdown("### Player Details")
        for player in party:
            with st.expander(player.name):
                try:
                    st.code(player.verbose_report())
                except CalculatorError as e:
                    st.error(e.message)


if __name__ == "__main__":
    main()
