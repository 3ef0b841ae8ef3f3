from __future__ import annotations

from caresync.core.logger import init_logging
from caresync.core.monitoring import init_monitoring
from caresync.workers.celery_app import REMINDER_QUEUE, celery_app


def main() -> None:
    """Launch the reminder worker with embedded beat.

    Concurrency is pinned to 1 so dispatch ticks are serialized.
    """
    init_logging()
    init_monitoring()
    celery_app.worker_main(
        ["worker", "--loglevel=info", "--beat", "--concurrency=1", f"--queues={REMINDER_QUEUE},default"]
    )


if __name__ == "__main__":
    main()
