"""
Play a batch of local games between two snake servers and report the win rate of the
new one. Games are refereed by the Battlesnake rules CLI; both servers must already be
running at the configured URLs.
"""

from collections import defaultdict
import subprocess
import os
from eval.config import GameConfig, load_game_config
import argparse
import json
import sympy
import sys
import logging
import traceback
from concurrent.futures import ProcessPoolExecutor, as_completed
from tqdm import tqdm
from eval.go_utils import check_and_install_rules_cli


class BenchmarkRunner:
    def __init__(self, iterations: int = 100, game_config: GameConfig = None, num_workers: int = 4):
        if game_config is None:
            game_config = GameConfig()
        self.cli_path = check_and_install_rules_cli(game_config.cli_path)
        self.iterations = iterations
        self.game_config = game_config
        self.num_workers = num_workers
        self.results = defaultdict(int)
        self.output_dir = (
            f"{game_config.output_dir}/{game_config.new_name}_vs_{game_config.old_name}"
        )
        os.makedirs(self.output_dir, exist_ok=True)

        # summary.log gets the run report and win rate, error.log only failed or skipped games.
        self.summary_logger = self._setup_summary_logger()
        self.error_logger = self._setup_error_logger()

    def _setup_summary_logger(self):
        """Configure logger for summary and progress messages"""
        logger = logging.getLogger("BenchmarkRunner.Summary")
        logger.setLevel(logging.INFO)
        logger.handlers.clear()

        formatter = logging.Formatter("%(message)s")

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        file_handler = logging.FileHandler(f"{self.output_dir}/summary.log", mode="w")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        logger.propagate = False
        return logger

    def _setup_error_logger(self):
        """Configure logger for error and warning messages"""
        logger = logging.getLogger("BenchmarkRunner.Error")
        logger.setLevel(logging.WARNING)
        logger.handlers.clear()

        formatter = logging.Formatter("[%(levelname)s] %(message)s")

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        file_handler = logging.FileHandler(f"{self.output_dir}/error.log", mode="w")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        logger.propagate = False
        return logger

    def game_seeds(self):
        """Consecutive primes above 100, one per game, so reruns replay the same games."""
        seeds = []
        last_prime = 100
        for _ in range(self.iterations):
            last_prime = sympy.nextprime(last_prime)
            seeds.append(str(last_prime))
        return seeds

    def record_result(self, result):
        if result == "draw":
            self.results["draws"] += 1
        elif result == "new":
            self.results["new_wins"] += 1
        elif result == "old":
            self.results["old_wins"] += 1
        else:
            self.results["skipped"] += 1

    def played_games(self):
        return self.results["new_wins"] + self.results["old_wins"] + self.results["draws"]

    def win_rate(self):
        """Percentage of played (not skipped) games won by the new snake."""
        played = self.played_games()
        if played == 0:
            return 0.0
        return self.results["new_wins"] / played * 100.0

    def run_multiple_games(self):
        """Run all games in parallel with real-time progress tracking"""
        config = self.game_config
        self.summary_logger.info("\n" + "=" * 60)
        self.summary_logger.info("     BATTLERAT WIN RATE BENCHMARK")
        self.summary_logger.info(
            f"     Running {self.iterations} games with {self.num_workers} parallel workers"
        )
        self.summary_logger.info(f"         - Board: {config.width}x{config.height}")
        self.summary_logger.info(f"         - New: {config.new_name} at {config.new_url}")
        self.summary_logger.info(f"         - Old: {config.old_name} at {config.old_url}")
        self.summary_logger.info(f"         - CLI: {self.cli_path}")
        self.summary_logger.info("=" * 60 + "\n")

        with ProcessPoolExecutor(max_workers=self.num_workers) as executor:
            future_to_game = {
                executor.submit(
                    run_single_game_worker,
                    game_num=game_num,
                    seed=seed,
                    output_dir=self.output_dir,
                    game_config=config,
                    cli_path=self.cli_path,
                ): game_num
                for game_num, seed in enumerate(self.game_seeds())
            }

            with tqdm(total=self.iterations, desc="Running games", unit="game") as pbar:
                for future in as_completed(future_to_game):
                    game_num = future_to_game[future]
                    try:
                        result = future.result()
                    except Exception as e:
                        self.error_logger.error(f"Game {game_num} failed with exception: {e}")
                        result = None
                    if result is None:
                        self.error_logger.warning(f"Game {game_num}: no result, skipped")
                    self.record_result(result)
                    pbar.set_postfix(
                        {
                            "new": self.results["new_wins"],
                            "old": self.results["old_wins"],
                            "draws": self.results["draws"],
                        },
                        refresh=True,
                    )
                    pbar.update(1)

        self.log_summary()
        return dict(self.results)

    def log_summary(self):
        self.summary_logger.info("=" * 60)
        self.summary_logger.info("     Summary:")
        self.summary_logger.info(f"         - Total Games: {self.iterations}")
        self.summary_logger.info(f"         - New Wins: {self.results['new_wins']}")
        self.summary_logger.info(f"         - Old Wins: {self.results['old_wins']}")
        self.summary_logger.info(f"         - Draws: {self.results['draws']}")
        self.summary_logger.info(f"         - Skipped: {self.results['skipped']}")
        self.summary_logger.info(
            f"{self.win_rate():.2f}% win rate with {self.results['new_wins']} wins "
            f"in {self.played_games()} games"
        )
        self.summary_logger.info("=" * 60)


def build_play_command(cli_path, game_config, seed, output_file):
    return [
        cli_path,
        "play",
        "-W",
        str(game_config.width),
        "-H",
        str(game_config.height),
        "-g",
        game_config.game_type,
        "-n",
        game_config.old_name,
        "-u",
        game_config.old_url,
        "-n",
        game_config.new_name,
        "-u",
        game_config.new_url,
        "-r",
        str(seed),
        "-o",
        output_file,
        "--timeout",
        str(game_config.timeout),
    ]


def parse_game_result(output_file, game_config):
    """
    Winner recorded on the last line of a game log: "new", "old", "draw", or None when
    the log is missing, empty or names neither snake.
    """
    if not os.path.exists(output_file):
        return None
    with open(output_file, "r") as f:
        lines = [line for line in f if line.strip()]
    if not lines:
        return None

    final_state = json.loads(lines[-1])
    if final_state.get("isDraw"):
        return "draw"
    winner = final_state.get("winnerName")
    if winner == game_config.new_name:
        return "new"
    if winner == game_config.old_name:
        return "old"
    return None


def forfeit_result(stderr, game_config):
    """
    When the CLI fails, the snake whose URL shows up in its last stderr line lost the
    game by failing or timing out.
    """
    lines = stderr.strip().split("\n")
    last_line = lines[-1] if lines else ""
    if game_config.new_url in last_line:
        return "old"
    if game_config.old_url in last_line:
        return "new"
    return None


def run_single_game_worker(game_num, seed, output_dir, game_config, cli_path):
    """
    Run a single game between the two configured servers.
    Assumes servers are already running at the configured URLs.
    """
    games_dir = f"{output_dir}/games"
    error_file = f"{games_dir}/game_{game_num}_error.txt"
    try:
        os.makedirs(games_dir, exist_ok=True)
        output_file = f"{games_dir}/game_{game_num}.json"

        cmd = build_play_command(cli_path, game_config, seed, output_file)
        result = subprocess.run(cmd, capture_output=True, text=True)

        if result.returncode != 0:
            outcome = forfeit_result(result.stderr, game_config)
            if outcome is None:
                with open(error_file, "w") as f:
                    f.write(f"Unknown error: {result.stderr}\n")
            return outcome

        outcome = parse_game_result(output_file, game_config)
        if outcome is None:
            with open(error_file, "w") as f:
                f.write("No winner found in game log\n")
                f.write(f"STDOUT:\n{result.stdout}\n")
                f.write(f"STDERR:\n{result.stderr}\n")
        return outcome

    except Exception as e:
        with open(error_file, "w") as f:
            f.write(f"Exception: {e}\n")
            f.write(traceback.format_exc())
        return None


def main(argv=None):
    parser = argparse.ArgumentParser(description="Battlerat win rate benchmark")
    parser.add_argument("games", type=int, help="Number of games to play")
    parser.add_argument("--workers", type=int, default=4, help="Number of parallel workers")
    parser.add_argument("--config", help="JSON file with GameConfig fields")
    parser.add_argument("--old-url", help="URL of the snake to beat")
    parser.add_argument("--new-url", help="URL of the snake under test")
    parser.add_argument("--cli", help="Path to the battlesnake rules CLI")
    args = parser.parse_args(argv)

    overrides = {"old_url": args.old_url, "new_url": args.new_url, "cli_path": args.cli}
    if args.config:
        game_config = load_game_config(args.config, **overrides)
    else:
        game_config = GameConfig(**{k: v for k, v in overrides.items() if v is not None})

    benchmark_runner = BenchmarkRunner(
        iterations=args.games, game_config=game_config, num_workers=args.workers
    )
    benchmark_runner.run_multiple_games()


if __name__ == "__main__":
    main()
