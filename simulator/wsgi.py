#setup: pip install -e .
#setup: flask --app simulator.wsgi run --port 5000 --debug

from simulator.app import create_app

app = create_app()


if __name__ == "__main__":
    app.run(port=3000, debug=True)
