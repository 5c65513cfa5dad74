#!/usr/bin/env python3
"""Development bootstrap for the KNX site backend.

Steps:
1. Run from the `backend/` directory.
2. Load `.env` and check the settings the app cannot start without.
3. Install the project (editable, with test extras) unless skipped.
4. Apply pending Alembic migrations, refusing to run on divergent heads.
5. Optionally seed the demo catalog.
6. Start Uvicorn with autoreload.
"""

from __future__ import annotations

import argparse
import os
import shlex
import subprocess
import sys
from pathlib import Path
from typing import Iterable

REQUIRED_ENV_VARS: tuple[str, ...] = (
    "DATABASE_URL",
    "REDIS_URL",
    "CELERY_BROKER_URL",
    "CELERY_RESULT_BACKEND",
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Prepare and start the KNX site backend in development mode."
    )
    parser.add_argument("--host", default="0.0.0.0", help="Uvicorn bind host")
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Uvicorn port (default: UVICORN_PORT or 8000)",
    )
    parser.add_argument("--no-reload", action="store_true", help="Disable autoreload")
    parser.add_argument("--skip-install", action="store_true", help="Skip pip install")
    parser.add_argument("--skip-migrations", action="store_true", help="Skip alembic upgrade")
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Load demo plans, options and features into an empty database",
    )
    return parser.parse_args()


def quote_command(command: Iterable[str]) -> str:
    return " ".join(shlex.quote(part) for part in command)


def run_step(command: list[str], description: str, env: dict[str, str], cwd: Path) -> None:
    """Run one bootstrap step; a non-zero exit aborts the bootstrap."""
    print(f"\n==> {description}")
    print(f"$ {quote_command(command)}")
    try:
        subprocess.run(command, check=True, env=env, cwd=cwd)
    except subprocess.CalledProcessError as exc:
        raise SystemExit(f"\n'{description}' failed (exit code {exc.returncode}).") from exc


def load_and_validate_env(env_file: Path) -> None:
    if not env_file.exists():
        raise SystemExit("backend/.env not found. Copy .env.example and fill it in.")

    from dotenv import load_dotenv

    load_dotenv(dotenv_path=env_file, override=False)
    missing = [key for key in REQUIRED_ENV_VARS if not os.getenv(key)]
    if missing:
        raise SystemExit(f"Missing required settings in .env: {', '.join(missing)}")


def apply_migrations(env: dict[str, str], cwd: Path) -> None:
    heads_cmd = [sys.executable, "-m", "alembic", "heads"]
    print("\n==> Checking migration heads")
    result = subprocess.run(heads_cmd, capture_output=True, text=True, env=env, cwd=cwd)
    if result.returncode != 0:
        raise SystemExit(f"alembic heads failed:\n{result.stderr.strip()}")
    heads = [line for line in result.stdout.splitlines() if line.strip()]
    if len(heads) > 1:
        raise SystemExit(
            f"{len(heads)} migration heads found; run 'alembic merge heads' first.\n"
            f"{result.stdout.strip()}"
        )
    run_step([sys.executable, "-m", "alembic", "upgrade", "head"], "Applying migrations", env, cwd)


def resolve_port(cli_port: int | None) -> int:
    if cli_port is not None:
        port = cli_port
    else:
        raw = os.getenv("UVICORN_PORT", "8000")
        try:
            port = int(raw)
        except ValueError:
            raise SystemExit(f"UVICORN_PORT='{raw}' is not an integer.")
    if not 1 <= port <= 65535:
        raise SystemExit(f"Port {port} is out of range (1-65535).")
    return port


def main() -> None:
    args = parse_args()
    backend_dir = Path(__file__).resolve().parent
    os.chdir(backend_dir)

    load_and_validate_env(backend_dir / ".env")
    env = os.environ.copy()
    env["PYTHONUNBUFFERED"] = "1"

    if not args.skip_install:
        run_step(
            [sys.executable, "-m", "pip", "install", "-e", f"{backend_dir.parent}[test]"],
            "Installing project",
            env,
            backend_dir,
        )
    if not args.skip_migrations:
        apply_migrations(env, backend_dir)
    if args.seed:
        run_step(
            [sys.executable, "-m", "scripts.seed_catalog"],
            "Seeding demo catalog",
            env,
            backend_dir,
        )

    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn", "app.main:app",
        "--host", args.host, "--port", str(resolve_port(args.port)),
    ]
    if not args.no_reload:
        uvicorn_cmd.append("--reload")
    print("\n==> Starting development server")
    print(f"$ {quote_command(uvicorn_cmd)}")
    try:
        subprocess.run(uvicorn_cmd, check=True, env=env, cwd=backend_dir)
    except KeyboardInterrupt:
        print("\nServer stopped.")
    except subprocess.CalledProcessError as exc:
        raise SystemExit(f"Server exited with code {exc.returncode}.") from exc


if __name__ == "__main__":
    main()
