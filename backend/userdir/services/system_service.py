# 프로세스 상태 서비스
# - 가동 시간(uptime), 메모리 사용량, 현재 시각
# /health, /api/stats 응답에 쓰입니다.

import os
import resource
import sys
import time
from typing import Dict

from ..models.user import to_iso, utcnow

_MB = 1024 * 1024


def iso_now() -> str:
    return to_iso(utcnow())


class ProcessStats:
    def __init__(self, started_at: float = None):
        self.started_at = time.monotonic() if started_at is None else started_at

    def uptime(self) -> int:
        return int(time.monotonic() - self.started_at)

    def memory(self) -> Dict[str, str]:
        """최대 상주 메모리(used)와 물리 메모리(total)를 "<n> MB" 형식으로 반환합니다."""
        max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
        # 주니어 개발자님께: ru_maxrss 단위가 Linux는 KB, macOS는 바이트입니다.
        used_bytes = max_rss if sys.platform == "darwin" else max_rss * 1024
        total_bytes = os.sysconf("SC_PAGE_SIZE") * os.sysconf("SC_PHYS_PAGES")
        return {
            "used": f"{round(used_bytes / _MB)} MB",
            "total": f"{round(total_bytes / _MB)} MB",
        }
