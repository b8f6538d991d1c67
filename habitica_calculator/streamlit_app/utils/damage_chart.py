"""
Party Damage Chart Component

Creates a stacked Plotly bar chart of each member's task and attack damage
under the optimal buff plan, with hover text showing how the attack damage
is dealt.
"""

import plotly.graph_objects as go

from habitica_calculator.buff_optimizer import PartyOptimum
from habitica_calculator.job_classes import get_hex_color


TASK_COLOR = "rgba(128, 128, 128, 0.6)"


def create_party_damage_chart(optimum: PartyOptimum, height: int = 350) -> go.Figure:
    """
    Create a stacked bar chart of damage per party member.

    Args:
        optimum: Result of calculate_max_party_damage()
        height: Chart height in pixels

    Returns:
        Plotly Figure object ready for display with st.plotly_chart()
    """
    names = [m.player.name for m in optimum.members]

    fig = go.Figure()

    fig.add_trace(go.Bar(
        x=names,
        y=[m.task_damage for m in optimum.members],
        name="Task Damage",
        marker_color=TASK_COLOR,
        hovertemplate="%{x}<br>Task Damage: <b>%{y:.1f}</b><extra></extra>",
    ))

    fig.add_trace(go.Bar(
        x=names,
        y=[m.attack.total for m in optimum.members],
        name="Attack Damage",
        marker_color=[get_hex_color(m.player) for m in optimum.members],
        customdata=[f"{m.player.attack_spell}: {m.attack.describe()}<br>"
                    f"{m.player.buff_spell} cast {m.num_buffs} times"
                    for m in optimum.members],
        hovertemplate="%{x}<br>Attack Damage: <b>%{y:.1f}</b><br>%{customdata}<extra></extra>",
    ))

    fig.update_layout(
        barmode="stack",
        title=f"Max Party Damage: {optimum.damage:.1f}",
        yaxis_title="Damage",
        height=height,
        margin=dict(l=40, r=20, t=50, b=40),
        plot_bgcolor="rgba(0,0,0,0)",
        paper_bgcolor="rgba(0,0,0,0)",
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
    )

    return fig
