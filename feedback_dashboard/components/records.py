"""
Rendering of dashboard state into Dash components
"""

from dash import html
import dash_bootstrap_components as dbc

from .formatting import (
    NO_CONFIDENCE,
    NO_LOCATION,
    NO_NOTES,
    NO_TRANSCRIPT,
    UNKNOWN_DATE,
    format_confidence,
    format_raw,
    format_timestamp,
    format_was_correct,
    is_present,
)

SELECT_PLACEHOLDER = '-- Select a user --'
LOADING_TEXT = 'Loading data...'


def _or_placeholder(value, placeholder, strict=False):
    if is_present(value, strict):
        return value
    return html.Em(placeholder)


def _field(label, value):
    return html.Div([html.Strong(f"{label}:"), " ", value])


def user_options(users):
    """Selector options: the empty placeholder followed by one entry per user"""
    options = [{'label': SELECT_PLACEHOLDER, 'value': ''}]
    options.extend({'label': user.email, 'value': user.email} for user in users)
    return options


def latest_users_strip(users, timezone='UTC'):
    """Horizontal strip of the newest users, or None when there are none"""
    if not users:
        return None

    cards = [
        dbc.Card(
            dbc.CardBody([
                html.Div(user.email, className="fw-bold"),
                html.Div(
                    format_timestamp(user.created_at, timezone) if user.created_at
                    else html.Em(UNKNOWN_DATE),
                    className="small text-muted"
                )
            ]),
            className="latest-user-card flex-shrink-0",
            style={'minWidth': 200}
        )
        for user in users
    ]

    return html.Div([
        html.H3("🧑‍💻 Latest Users", className="mb-2"),
        html.Div(cards, className="d-flex gap-3 overflow-auto pb-2")
    ], id='latest-users', className="mb-4")


def items_table(items, strict=False):
    """Saved items table, or None when the user has no items"""
    if not items:
        return None

    rows = [
        html.Tr([
            html.Td(item.item_name),
            html.Td(item.location),
            html.Td(_or_placeholder(item.notes, NO_NOTES, strict))
        ], key=item.id)
        for item in items
    ]

    return dbc.Card([
        dbc.CardHeader(html.H5("📦 Saved Items")),
        dbc.CardBody([
            dbc.Table([
                html.Thead(html.Tr([
                    html.Th("Item"),
                    html.Th("Location"),
                    html.Th("Notes")
                ])),
                html.Tbody(rows)
            ], bordered=True, hover=True, responsive=True, striped=True)
        ])
    ], className="mb-4")


def feedback_entry(record, timezone='UTC', strict=False):
    confidence = format_confidence(record.confidence_score)
    children = [
        html.Div(format_timestamp(record.created_at, timezone), className="small text-muted"),
        _field("Transcript", _or_placeholder(record.transcript, NO_TRANSCRIPT, strict)),
        _field("Intent", format_raw(record.intent)),
        _field("Action Type", format_raw(record.action_type)),
        _field("Item", format_raw(record.item)),
        _field("Location", _or_placeholder(record.location, NO_LOCATION, strict)),
        _field("Confidence", confidence if confidence is not None else html.Em(NO_CONFIDENCE)),
        _field("Was Correct", format_was_correct(record.was_correct, strict)),
    ]

    optional = [
        ("Corrected Item", record.corrected_item),
        ("Corrected Location", record.corrected_location),
        ("Corrected Command", record.corrected_command),
        ("Note", record.note),
    ]
    children.extend(_field(label, value) for label, value in optional if is_present(value, strict))

    if is_present(record.audio_url, strict):
        children.append(html.Div(html.Audio(src=record.audio_url, controls=True), className="mt-1"))

    return html.Div(children, key=record.id, className="feedback-entry py-3 border-bottom")


def feedback_list(feedback, timezone='UTC', strict=False):
    """Scrollable list of feedback entries; always rendered, possibly empty"""
    return html.Div(
        [feedback_entry(record, timezone, strict) for record in feedback],
        id='feedback-entries',
        className="border-top",
        style={'maxHeight': 500, 'overflowY': 'auto'}
    )


def status_message(loading, error):
    """Loading line and error alert for the current state"""
    children = []
    if loading:
        children.append(html.P(LOADING_TEXT))
    if error:
        children.append(html.P(error, className="text-danger"))
    return children
