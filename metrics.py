"""Wall-clock timing for a batch run."""
import time
from typing import Dict, List, Optional


class Metrics:
    def __init__(self):
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.build_times: List[float] = []
        self.verify_times: List[float] = []
        self._t0: Optional[float] = None

    def start(self):
        self.start_time = time.perf_counter()

    def stop(self):
        self.end_time = time.perf_counter()

    def start_graph(self):
        self._t0 = time.perf_counter()

    def end_build(self):
        self.build_times.append(time.perf_counter() - self._t0)

    def start_verify(self):
        self._t0 = time.perf_counter()

    def end_verify(self):
        self.verify_times.append(time.perf_counter() - self._t0)

    def summary(self) -> Dict[str, Optional[float]]:
        total = None
        if self.start_time is not None and self.end_time is not None:
            total = self.end_time - self.start_time
        return {
            'total_time': total,
            'graphs': len(self.build_times),
            'avg_build_time': sum(self.build_times)/len(self.build_times) if self.build_times else None,
            'max_build_time': max(self.build_times) if self.build_times else None,
            'avg_verify_time': sum(self.verify_times)/len(self.verify_times) if self.verify_times else None,
        }
