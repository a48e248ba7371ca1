from cookie_racho.cli import app

app()
