from bookapi.main import run

run()
