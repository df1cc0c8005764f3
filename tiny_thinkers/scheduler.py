"""
Fixed-delay timers driven by the game clock
"""

import heapq
import itertools
import logging

logger = logging.getLogger(__name__)


class Timer:
    """Handle for one scheduled callback"""

    def __init__(self, due, callback, group):
        self.due = due
        self.callback = callback
        self.group = group
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class Scheduler:
    """Runs callbacks once the game clock passes their due time.

    Timers due at the same moment fire in the order they were scheduled.
    Every timer belongs to a group so a whole stage's pending narration can be
    dropped at once.
    """

    def __init__(self):
        self.now = 0.0
        self._heap = []
        self._counter = itertools.count()

    def schedule(self, delay, callback, group=None):
        """Run callback after delay seconds of game time"""
        timer = Timer(self.now + max(0.0, delay), callback, group)
        heapq.heappush(self._heap, (timer.due, next(self._counter), timer))
        return timer

    def cancel(self, group):
        """Cancel every pending timer in group, returns how many were dropped"""
        dropped = 0
        for _, _, timer in self._heap:
            if timer.group == group and not timer.cancelled:
                timer.cancel()
                dropped += 1
        if dropped:
            logger.debug("Cancelled %d pending timers for %s", dropped, group)
        return dropped

    def cancel_all(self):
        for _, _, timer in self._heap:
            timer.cancel()
        self._heap = []

    def pending(self, group=None):
        return sum(
            1 for _, _, timer in self._heap
            if not timer.cancelled and (group is None or timer.group == group)
        )

    def advance(self, dt):
        """Move the clock forward by dt seconds, firing due timers in order"""
        target = self.now + max(0.0, dt)
        # Callbacks may schedule more timers that are already due
        while self._heap and self._heap[0][0] <= target:
            due, _, timer = heapq.heappop(self._heap)
            if timer.cancelled:
                continue
            self.now = due
            timer.callback()
        self.now = target
