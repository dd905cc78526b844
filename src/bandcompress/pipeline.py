"""
Batch pipeline: expand every user path, compress each file, keep the tally.

Inputs are handled in the order given. Each input is expanded with
`collect_video_files`; an input that yields nothing is logged and skipped
without counting. Every discovered file is compressed by `run_job` and its
outcome is reported at once and folded into `RunCounters`.

With one worker (the default) jobs run one after another on the calling
thread. With more workers they go to a bounded thread pool; the counters are
then updated under a lock and output names are claimed through
`OutputReservations` so two jobs never write the same file.
"""
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Iterable, List, Optional, Set

from tqdm import tqdm

from bandcompress import transcode
from bandcompress.transcode import EncodeJob, JobOutcome
from bandcompress.utils import LogLevel, logger, time_util
from bandcompress.utils.config import CompressorConfig
from bandcompress.utils.file_util import OutputReservations
from bandcompress.utils.system_util import Toolchain


@dataclass
class RunCounters:
    found: int = 0
    succeeded: int = 0
    skipped: int = 0
    failed: int = 0

    def record(self, outcome: JobOutcome) -> None:
        self.found += 1
        if outcome.succeeded:
            self.succeeded += 1
        elif outcome.skipped:
            self.skipped += 1
        else:
            self.failed += 1

    def is_consistent(self) -> bool:
        return self.found == self.succeeded + self.skipped + self.failed

    def as_dict(self) -> dict:
        return asdict(self)


def _report(outcome: JobOutcome) -> None:
    """Log one finished job."""
    if outcome.succeeded:
        logger.log("job.ok", LogLevel.INFO, file=outcome.source.name, dst=outcome.target)
    elif outcome.skipped:
        logger.log("job.skip", LogLevel.INFO, file=outcome.source.name, reason=outcome.reason, dst=outcome.target)
    else:
        logger.log("job.fail", LogLevel.ERROR,
                   file=outcome.source.name,
                   reason=outcome.reason,
                   exit_code=outcome.exit_code)


class _BatchRun:
    """State of one run_batch call."""

    def __init__(self, config: CompressorConfig, tools: Toolchain, workers: int):
        self.config = config
        self.tools = tools
        self.workers = workers
        self.counters = RunCounters()
        self.seen: Set[Path] = set()
        self.lock = threading.Lock()
        self.reservations = OutputReservations() if workers > 1 else None

    def new_files(self, files: List[Path]) -> List[Path]:
        fresh = []
        for f in files:
            if f in self.seen:
                logger.log("input.duplicate", LogLevel.DEBUG, file=f)
                continue
            self.seen.add(f)
            fresh.append(f)
        return fresh

    def run_one(self, job: EncodeJob) -> JobOutcome:
        return transcode.run_job(job, self.tools, on_collision=self.config.on_collision,
                                 reservations=self.reservations)

    def fold(self, outcome: JobOutcome, bar: tqdm, done: int, total: int, started: float) -> None:
        with self.lock:
            self.counters.record(outcome)
            _report(outcome)
            bar.update(1)
            if done < total:
                logger.log("batch.progress", LogLevel.DEBUG,
                           completed=done,
                           total=total,
                           eta=time_util.get_eta_remaining(done, total, time.time() - started))

    def run_input(self, label: str, files: List[Path], executor: Optional[ThreadPoolExecutor]) -> None:
        jobs = [EncodeJob(source=f, output_dir=self.config.output_directory) for f in files]
        total = len(jobs)
        started = time.time()
        with tqdm(total=total, desc=label, unit="file", disable=None) as bar:
            if executor is None:
                for done, job in enumerate(jobs, start=1):
                    self.fold(self.run_one(job), bar, done, total, started)
                return

            futs = [executor.submit(self.run_one, job) for job in jobs]
            for done, fut in enumerate(as_completed(futs), start=1):
                self.fold(fut.result(), bar, done, total, started)


def run_batch(inputs: Iterable, config: CompressorConfig, tools: Toolchain, workers: int = 1) -> RunCounters:
    """
    Compress every video reachable from `inputs` into `config.output_directory`.

    Args:
        inputs: Files and/or folders, processed in the given order
        config: Output folder and collision policy (read-only during the run)
        tools: Resolved ffmpeg/ffprobe paths
        workers: Concurrent ffmpeg processes; 1 runs strictly sequentially

    Returns:
        RunCounters with one of succeeded/skipped/failed counted per file
    """
    run = _BatchRun(config, tools, max(1, workers))
    start_time = time.time()
    logger.log("batch.start", LogLevel.INFO,
               inputs=len(inputs) if hasattr(inputs, "__len__") else None,
               output=config.output_directory,
               on_collision=config.on_collision,
               workers=run.workers)

    executor = ThreadPoolExecutor(max_workers=run.workers) if run.workers > 1 else None
    try:
        for raw in inputs:
            path = Path(raw).expanduser()
            files = transcode.collect_video_files(path)
            if not files:
                if path.exists():
                    logger.log("input.empty", LogLevel.WARN, path=path, msg="No video files found")
                else:
                    logger.log("input.missing", LogLevel.WARN, path=path, msg="Path does not exist")
                continue

            files = run.new_files(files)
            if not files:
                continue
            logger.log("input.start", LogLevel.INFO, path=path, files=len(files))
            run.run_input(path.name or str(path), files, executor)
    finally:
        if executor is not None:
            executor.shutdown(wait=True)

    counters = run.counters
    logger.log("batch.end", LogLevel.INFO,
               runtime=time_util.format_runtime(time.time() - start_time),
               **counters.as_dict())
    return counters
