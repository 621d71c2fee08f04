from tasktrack.main import app

app()
