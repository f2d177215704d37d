"""Redirect document rendering."""

import html
import json

_REDIRECT_TEMPLATE = """<!DOCTYPE html>
<html lang="en-US">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<meta name="robots" content="noindex">
<title>Redirecting...</title>
<link rel="canonical" href="{attr_url}">
<meta http-equiv="refresh" content="0; url={attr_url}">
<script>
var anchor = window.location.hash;
window.location.replace({script_url} + anchor);
</script>
</head>
<body>
<p>Redirecting to <a href="{attr_url}">{text_url}</a>...</p>
</body>
</html>
"""


def render_redirect_document(destination_url: str) -> str:
    """Render a standalone HTML page that redirects to destination_url.

    The page redirects with a script that keeps the current URL fragment,
    falls back to a meta refresh when scripts are disabled, and shows a
    plain link as a last resort. It loads no external resources.

    Args:
        destination_url: Absolute or root-relative URL to navigate to

    Returns:
        Complete HTML document
    """
    # "</" inside the script body would end the <script> element early
    script_url = json.dumps(destination_url).replace("</", "<\\/")
    return _REDIRECT_TEMPLATE.format(
        attr_url=html.escape(destination_url, quote=True),
        text_url=html.escape(destination_url, quote=False),
        script_url=script_url,
    )
