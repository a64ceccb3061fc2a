"""
Web application for the Banked Rail Curve model

Interactive dashboard showing the cross-section of a train in a banked curve,
the forces acting on it and whether it is balanced, too fast or too slow.
"""

import logging
from typing import Any, List

import dash
from dash import dcc, html, Input, Output, State
from dash.exceptions import PreventUpdate
import numpy as np
import plotly.graph_objs as go

from banked_curve import (
    ControlState,
    PhysicsResult,
    describe_status,
    kmh_to_ms,
    layout_force_vectors,
    ms_to_kmh,
    run_velocity_sweep,
)
from banked_curve.controls import (
    ANGLE_MAX_DEG,
    ANGLE_MIN_DEG,
    ANGLE_STEP_DEG,
    MAX_SPEED_KMH,
    RADIUS_MAX,
    RADIUS_MIN,
    RADIUS_STEP,
)
from banked_curve.geometry import (
    AXLE_CENTER,
    BODY_GAP,
    BODY_HEIGHT,
    CENTER_OF_MASS,
    RAIL_HEIGHT,
    TRACK_WIDTH,
    WHEEL_TREAD_RADIUS,
    track_to_lab,
)

logger = logging.getLogger(__name__)

DEFAULT_STATE = ControlState()

FORCE_MODE_LABELS = {
    "none": "Hidden",
    "real": "Real positions",
    "concurrent": "Concurrent (centre of mass)",
}


# Initialize Dash app
app = dash.Dash(__name__)
app.title = "Banked Rail Curve"


def _slider_block(label: str, control: Any, extra: Any = None) -> html.Div:
    """Label row plus control, styled like the other panel inputs"""
    return html.Div([
        html.Div([
            html.Label(label, style={'fontWeight': 'bold', 'marginBottom': '5px'}),
            extra if extra is not None else html.Span(),
        ], style={'display': 'flex', 'justifyContent': 'space-between'}),
        control,
    ], style={'marginBottom': '25px'})


# Define app layout
app.layout = html.Div([
    html.Div([
        html.H1("Train in a Banked Curve",
                style={'textAlign': 'center', 'marginBottom': '30px'}),

        html.Div([
            # Left column: status card and controls
            html.Div([
                html.Div(id='status-card', style={'marginBottom': '20px'}),

                html.Div([
                    _slider_block(
                        "Bank angle θ (°)",
                        dcc.Slider(
                            id='angle-slider',
                            min=ANGLE_MIN_DEG,
                            max=ANGLE_MAX_DEG,
                            step=ANGLE_STEP_DEG,
                            value=DEFAULT_STATE.bank_angle_deg,
                            marks={0: '0°', 30: '30°'},
                        ),
                    ),
                    _slider_block(
                        "Curve radius r (m)",
                        dcc.Slider(
                            id='radius-slider',
                            min=RADIUS_MIN,
                            max=RADIUS_MAX,
                            step=RADIUS_STEP,
                            value=DEFAULT_STATE.radius,
                            marks={100: '100 m', 4000: '4000 m'},
                        ),
                    ),
                    _slider_block(
                        "Train speed v (km/h)",
                        dcc.Slider(
                            id='speed-slider',
                            min=0,
                            max=MAX_SPEED_KMH,
                            step=1,
                            value=DEFAULT_STATE.velocity_kmh,
                            marks={0: '0 km/h', 300: '300 km/h'},
                        ),
                        html.Button(
                            id='snap-button',
                            title="Apply the ideal speed",
                            style={'color': 'green', 'fontWeight': 'bold',
                                   'border': 'none', 'cursor': 'pointer',
                                   'backgroundColor': '#f0fdf4'},
                        ),
                    ),
                    html.Label("Force display:",
                               style={'fontWeight': 'bold', 'marginBottom': '5px'}),
                    dcc.RadioItems(
                        id='force-mode',
                        options=[{'label': v, 'value': k} for k, v in FORCE_MODE_LABELS.items()],
                        value=DEFAULT_STATE.force_mode,
                        inline=True,
                        style={'marginBottom': '15px'},
                    ),
                    dcc.Checklist(
                        id='show-plane',
                        options=[{'label': ' Show plane of circular motion', 'value': 'plane'}],
                        value=[],
                    ),
                ], style={'padding': '20px', 'backgroundColor': '#f5f5f5',
                          'borderRadius': '10px'}),

                html.Div(id='status-message', style={'marginTop': '20px', 'fontSize': '14px'}),
            ], style={'width': '34%', 'display': 'inline-block', 'verticalAlign': 'top',
                      'marginRight': '2%'}),

            # Right column: figures
            html.Div([
                dcc.Graph(id='cross-section'),
                html.Div("* View: rear cross-section of the train | red dot: centre of mass",
                         style={'textAlign': 'center', 'color': '#64748b'}),
                dcc.Graph(id='sweep-figure'),
            ], style={'width': '64%', 'display': 'inline-block'}),
        ]),
    ], style={'maxWidth': '1400px', 'margin': '0 auto', 'padding': '20px'})
])


def create_status_card(state: ControlState, result: PhysicsResult) -> html.Div:
    """Status title, explanation and speed difference"""
    description = describe_status(result.status)
    diff_kmh = ms_to_kmh(result.velocity_difference(state.velocity))
    return html.Div([
        html.H3(description.title, style={'marginBottom': '5px'}),
        html.P(description.description, style={'marginBottom': '5px'}),
        html.Small(f"Speed difference from ideal: {diff_kmh:+.1f} km/h"),
    ], style={
        'padding': '15px',
        'borderLeft': f"5px solid {description.color}",
        'color': description.color,
        'backgroundColor': '#ffffff',
        'borderRadius': '10px',
        'boxShadow': '0 1px 4px rgba(0,0,0,0.15)',
    })


def _add_polygon(fig: go.Figure, points: List[tuple], angle: float, color: str,
                 line_color: str = "#1e293b") -> None:
    """Add a closed polygon given in the track frame"""
    lab = track_to_lab(np.array(points + [points[0]], dtype=float), angle)
    fig.add_trace(go.Scatter(
        x=lab[:, 0], y=lab[:, 1],
        mode="lines",
        fill="toself",
        fillcolor=color,
        line=dict(color=line_color, width=1),
        hoverinfo="skip",
        showlegend=False,
    ))


def _rect(x0: float, y0: float, x1: float, y1: float) -> List[tuple]:
    """Corners of an axis-aligned rectangle in the track frame"""
    return [(x0, y0), (x1, y0), (x1, y1), (x0, y1)]


def create_cross_section_figure(state: ControlState, result: PhysicsResult) -> go.Figure:
    """
    Draw the track, wheelset, body and force arrows

    Args:
        state: Control panel values (angle, force mode, plane toggle)
        result: Engine output for the same values

    Returns:
        Plotly figure in lab coordinates (px), curve centre to the left
    """
    angle = state.bank_angle_deg
    fig = go.Figure()

    # Ground line
    fig.add_shape(type="line", x0=-400, y0=0, x1=TRACK_WIDTH + 400, y1=0,
                  line=dict(color="#64748b", width=2))

    # Sleeper, rails and wheelset
    _add_polygon(fig, _rect(-40, -12, TRACK_WIDTH + 40, 0), angle, "#94a3b8")
    axle_y = AXLE_CENTER[1]
    for rail_x in (0.0, TRACK_WIDTH):
        _add_polygon(fig, _rect(rail_x - 6, 0, rail_x + 6, RAIL_HEIGHT), angle, "#cbd5e1", "#94a3b8")
        _add_polygon(
            fig,
            _rect(rail_x - 17.5, axle_y - WHEEL_TREAD_RADIUS, rail_x + 17.5, axle_y + WHEEL_TREAD_RADIUS),
            angle,
            "#475569",
        )
    _add_polygon(fig, _rect(0, axle_y - 10, TRACK_WIDTH, axle_y + 10), angle, "#334155")

    # Train body
    body_bottom = axle_y + BODY_GAP
    body_top = body_bottom + BODY_HEIGHT
    left = TRACK_WIDTH / 2 - 160
    right = TRACK_WIDTH / 2 + 160
    _add_polygon(fig, [
        (left + 30, body_bottom), (right - 30, body_bottom), (right, body_bottom + 40),
        (right, body_top - 40), (right - 40, body_top), (left + 40, body_top),
        (left, body_top - 40), (left, body_bottom + 40),
    ], angle, "rgba(255, 255, 255, 0.75)", "#2563eb")

    com = track_to_lab(np.array(CENTER_OF_MASS), angle)[0]
    fig.add_trace(go.Scatter(
        x=[com[0]], y=[com[1]],
        mode="markers",
        marker=dict(color="#ef4444", size=14, line=dict(color="white", width=2)),
        name="Centre of mass",
        showlegend=False,
    ))

    # Force arrows
    for vector in layout_force_vectors(result, angle, state.force_mode):
        start, end = track_to_lab(np.array([vector.origin, vector.tip]), angle)
        fig.add_annotation(
            x=end[0], y=end[1], ax=start[0], ay=start[1],
            xref="x", yref="y", axref="x", ayref="y",
            text=vector.label,
            showarrow=True,
            arrowhead=2,
            arrowwidth=3 if not vector.dashed else 2,
            arrowcolor=vector.color,
            font=dict(color=vector.color, size=18),
        )

    # Plane of circular motion through the centre of mass
    if state.show_plane:
        fig.add_shape(type="line", x0=com[0], y0=com[1], x1=com[0] - 600, y1=com[1],
                      line=dict(color="#0f172a", width=2, dash="dash"))
        fig.add_annotation(x=com[0] - 300, y=com[1] + 20, text="Plane of circular motion",
                           showarrow=False)

    fig.update_layout(
        height=520,
        template="plotly_white",
        margin=dict(l=10, r=10, t=30, b=10),
        xaxis=dict(visible=False, range=[-420, TRACK_WIDTH + 420]),
        yaxis=dict(visible=False, range=[-60, 520], scaleanchor="x"),
    )
    return fig


def create_sweep_figure(state: ControlState, result: PhysicsResult) -> go.Figure:
    """Flange force against speed with the ideal speed and current speed marked"""
    sweep = run_velocity_sweep(state.bank_angle_deg, state.radius)
    speeds_kmh = ms_to_kmh(sweep["velocity"])

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=speeds_kmh,
        y=sweep["flange_force"],
        mode="lines",
        name="Flange force",
        line=dict(color="#ef4444", width=2),
        hovertemplate="Speed: %{x:.0f} km/h<br>Flange force: %{y:.0f} N<extra></extra>",
    ))
    fig.add_vline(x=ms_to_kmh(result.ideal_velocity), line_dash="dash", line_color="green",
                  annotation_text="ideal")
    fig.add_vline(x=ms_to_kmh(state.velocity), line_color="#2563eb",
                  annotation_text="current")
    fig.update_layout(
        title="Flange Force vs Speed (positive = outer rail pushes inward)",
        xaxis_title="Speed (km/h)",
        yaxis_title="Flange force (N)",
        xaxis=dict(range=[0, MAX_SPEED_KMH]),
        height=350,
        template="plotly_white",
    )
    return fig


@app.callback(
    Output("speed-slider", "value"),
    [Input("snap-button", "n_clicks")],
    [State("speed-slider", "value"), State("angle-slider", "value"), State("radius-slider", "value")],
)
def snap_to_ideal(n_clicks: int | None, speed_kmh: float, angle: float, radius: float) -> float:
    """Move the speed slider to the ideal speed"""
    if n_clicks is None:
        raise PreventUpdate

    state = ControlState(velocity=kmh_to_ms(speed_kmh), bank_angle_deg=angle, radius=radius)
    snapped = state.snap_to_ideal()
    logger.debug("Snapped speed to %.2f m/s", snapped.velocity)
    return ms_to_kmh(snapped.velocity)


@app.callback(
    [
        Output("status-card", "children"),
        Output("snap-button", "children"),
        Output("cross-section", "figure"),
        Output("sweep-figure", "figure"),
        Output("status-message", "children"),
    ],
    [
        Input("speed-slider", "value"),
        Input("angle-slider", "value"),
        Input("radius-slider", "value"),
        Input("force-mode", "value"),
        Input("show-plane", "value"),
    ],
)
def update_view(
    speed_kmh: float, angle: float, radius: float, force_mode: str, show_plane: list[str]
) -> tuple[Any, Any, Any, Any, Any]:
    """Evaluate the current control values and redraw"""
    try:
        state = ControlState(
            velocity=kmh_to_ms(speed_kmh),
            bank_angle_deg=angle,
            radius=radius,
            force_mode=force_mode,
            show_plane="plane" in (show_plane or []),
        ).clamped()
        result = state.evaluate()
        logger.debug("Evaluated %s -> %s", state, result.status.value)

        snap_label = f"Ideal: {ms_to_kmh(result.ideal_velocity):.1f} km/h"
        return (
            create_status_card(state, result),
            snap_label,
            create_cross_section_figure(state, result),
            create_sweep_figure(state, result),
            "",
        )

    except Exception as e:
        logger.exception("Evaluation failed")
        error_msg = f"Error: {str(e)}"
        return [], "", go.Figure(), go.Figure(), html.Div(error_msg, style={"color": "red"})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, port=8050)
