from secretdesk.cli import app

app()
