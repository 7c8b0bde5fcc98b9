from glissue.cli import app

app()
