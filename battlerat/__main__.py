from battlerat.main import end, info, move, start
from battlerat.server import run_server


def main():
    run_server({"info": info, "start": start, "move": move, "end": end})


# Start server when `python -m battlerat` is run
if __name__ == "__main__":
    main()
