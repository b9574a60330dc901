"""Example: call the service layer directly, without Flask.

Controllers stay thin; the use cases live in the services wired by the container.
"""

import importlib

from config import get_settings_module

from src.tutoring_center.tutoring_center.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, settings=settings)
    try:
        for row in container.leaderboard_service.ranked("ALL")[:10]:
            print(f"{row.total_score:>5}  {row.student_fcc_id}  {row.name or '-'}")
    finally:
        container.runner.shutdown()
        container.render_runner.shutdown()


if __name__ == "__main__":
    main()
