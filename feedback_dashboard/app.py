"""
Transcript Feedback Dashboard - Main Application
Dash application for reviewing users' voice-transcript feedback and saved items
"""

import logging
import sys

import dash
from dash import html, dcc
import dash_bootstrap_components as dbc
from dash.dependencies import Input, Output

from .config import ConfigurationError, load_settings
from .controller import ControllerRegistry
from .pages import feedback_viewer
from .utils.db_connection import get_table_client

logger = logging.getLogger(__name__)


def not_found_page():
    return dbc.Container([
        dbc.Row([
            dbc.Col([
                html.H1("404: Page Not Found", className="text-danger"),
                html.P("The page you're looking for doesn't exist."),
                dbc.Button("Go Home", href="/", color="primary")
            ])
        ])
    ])


def create_app(settings=None, client=None):
    """
    Build the Dash app

    Args:
        settings (Settings): loaded from the environment when omitted
        client (TableQueryClient): created from settings when omitted

    Returns:
        dash.Dash: configured application
    """
    if settings is None:
        settings = load_settings()
    if client is None:
        client = get_table_client(settings)

    app = dash.Dash(
        __name__,
        external_stylesheets=[dbc.themes.BOOTSTRAP],
        suppress_callback_exceptions=True,
        title="Transcript Feedback Viewer"
    )

    registry = ControllerRegistry(
        client,
        page_size=settings.page_size,
        max_sessions=settings.max_sessions
    )
    feedback_viewer.register_callbacks(app, registry, settings)

    # App layout with URL routing
    app.layout = html.Div([
        dcc.Location(id='url', refresh=False),
        html.Div(id='page-content', className="p-3")
    ])

    @app.callback(
        Output('page-content', 'children'),
        Input('url', 'pathname')
    )
    def display_page(pathname):
        """Route to the viewer, anything else is a 404"""
        if pathname in ('/', None):
            return feedback_viewer.layout()
        return not_found_page()

    return app


def configure_logging(level='INFO'):
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def main():
    try:
        settings = load_settings()
    except ConfigurationError as e:
        configure_logging()
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    configure_logging(settings.log_level)
    app = create_app(settings)

    logger.info("=" * 60)
    logger.info("Transcript Feedback Dashboard")
    logger.info("=" * 60)
    logger.info(f"Access the dashboard at: http://{settings.host}:{settings.port}")

    app.run(
        host=settings.host,
        port=settings.port,
        debug=settings.debug
    )


if __name__ == '__main__':
    main()
