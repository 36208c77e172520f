import threading
from typing import Callable


class ThreadedTaskRunner:
    """Runs blocking calls on daemon threads and hands results back to the UI loop.

    ``schedule`` must run a callable on the UI thread, e.g.
    ``lambda fn: widget.after(0, fn)``.
    """

    def __init__(self, schedule: Callable[[Callable[[], None]], None]):
        self._schedule = schedule

    def submit(
        self,
        work: Callable[[], object],
        on_success: Callable[[object], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        def run():
            try:
                result = work()
            except Exception as e:
                error = e
                self._schedule(lambda: on_error(error))
                return
            self._schedule(lambda: on_success(result))

        threading.Thread(target=run, daemon=True).start()
