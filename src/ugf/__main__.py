from ugf.cli.app import app

app()
