"""
Transcript Feedback Viewer page
Pick a user by email and browse their transcript feedback and saved items
"""

import uuid

from dash import html, dcc
from dash.dependencies import Input, Output, State
import dash_bootstrap_components as dbc

from ..controller import DATA_ERROR, USERS_ERROR
from ..components import (
    LOADING_TEXT,
    feedback_list,
    items_table,
    latest_users_strip,
    status_message,
    user_options,
)


def layout():
    """Build the page; every page load gets its own session id"""
    return dbc.Container([
        dcc.Store(id='session-id', data=str(uuid.uuid4())),

        html.Div(id='latest-users-container'),

        dbc.Row([
            dbc.Col([
                html.H2("Transcript Feedback Viewer", className="text-primary mb-3"),
            ])
        ]),

        dbc.Row([
            dbc.Col([
                dbc.Card([
                    dbc.CardBody([
                        html.Label("Filter by user email:", htmlFor='email-selector', className="fw-bold"),
                        dbc.Select(
                            id='email-selector',
                            options=user_options([]),
                            value=''
                        )
                    ])
                ], className="mb-4")
            ], md=12)
        ]),

        html.Div(id='users-status'),

        dcc.Loading(
            id="loading-detail",
            children=[
                html.Div(id='detail-status'),
                html.Div(id='items-container'),
                html.Div(id='feedback-container')
            ],
            type="default",
            custom_spinner=html.P(LOADING_TEXT)
        )
    ], fluid=True, style={'maxWidth': 800})


def update_users(session_id, registry, settings):
    """Initial load: newest users strip, selector options and users error"""
    controller = registry.get(session_id)
    controller.load_recent_users()
    controller.load_all_users()

    state = controller.state
    return (
        latest_users_strip(state.latest_users, settings.timezone),
        user_options(state.users),
        status_message(False, state.error if state.error == USERS_ERROR else None),
    )


def update_detail(email, session_id, registry, settings):
    """Selection change: load the chosen user's feedback and items"""
    controller = registry.get(session_id)
    email = email or None
    if email and not controller.state.users:
        # session was evicted or its users never loaded
        controller.load_all_users()
    if email != controller.state.selected_email:
        controller.select_user(email)

    state = controller.state
    detail_error = state.error if state.error == DATA_ERROR else None
    return (
        status_message(state.loading, detail_error),
        items_table(state.items, settings.strict_nulls),
        feedback_list(state.feedback, settings.timezone, settings.strict_nulls),
    )


def register_callbacks(app, registry, settings):
    """Wire the page's callbacks to the given controller registry"""

    @app.callback(
        [Output('latest-users-container', 'children'),
         Output('email-selector', 'options'),
         Output('users-status', 'children')],
        Input('session-id', 'data')
    )
    def on_session_start(session_id):
        return update_users(session_id, registry, settings)

    @app.callback(
        [Output('detail-status', 'children'),
         Output('items-container', 'children'),
         Output('feedback-container', 'children')],
        [Input('email-selector', 'value'),
         Input('email-selector', 'options')],
        State('session-id', 'data')
    )
    def on_selection_change(email, options, session_id):
        return update_detail(email, session_id, registry, settings)
