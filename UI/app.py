import dash
import dash_bootstrap_components as dbc

from UI.constants import APP_TITLE
from UI.pages.shell_layout import layout

app = dash.Dash(
    __name__,
    title=APP_TITLE,
    external_stylesheets=[dbc.themes.DARKLY, dbc.icons.FONT_AWESOME],
    suppress_callback_exceptions=True,
)
app.layout = layout
server = app.server
