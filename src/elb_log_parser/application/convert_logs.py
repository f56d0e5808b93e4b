"""
Convert logs use case.

Orchestrates discovery -> decompression -> tokenizing -> schema -> JSON,
parsing files in parallel while writing records in a fixed order.

Threads:

    discovery iterator ---> N worker threads ---> 1 writer (calling thread)
      (pulled under lock)     one file each       drains lanes in discovery order

Each file gets its own bounded lane. The writer only reads the lane of the
earliest unfinished file, so output never interleaves files, and a worker
that runs ahead fills its lane and then waits.
"""

import logging
import queue
import threading
from dataclasses import dataclass, field
from typing import Iterable, Iterator, TextIO

from elb_log_parser.application.ports import LineSourceFactory, SkipReporter
from elb_log_parser.core.exceptions import ElbLogError, ParseError
from elb_log_parser.core.models import (
    ConversionSummary,
    ConvertConfig,
    InputDescriptor,
    ParseOutcome,
    RawLine,
)
from elb_log_parser.core.schema import LogFormat, parse_line
from elb_log_parser.infrastructure.sources import DecompressingLineSource

__all__ = ["ConvertLogsUseCase", "parse_raw_line"]

logger = logging.getLogger(__name__)


# Marks the end of a lane.
_END = object()


def parse_raw_line(line: RawLine, log_format: LogFormat) -> ParseOutcome:
    """Parse one line, capturing any parse error together with its location."""
    try:
        record = parse_line(line.text, log_format)
    except ParseError as e:
        return ParseOutcome(line=line, error=e.locate(line.source, line.line_number))
    return ParseOutcome(line=line, record=record)


def _log_skipped(error: ParseError) -> None:
    logger.warning("Skipping error: %s", error)


@dataclass
class _Lane:
    """Bounded channel carrying one file's JSON lines to the writer."""
    index: int
    descriptor: InputDescriptor
    items: queue.Queue = field(repr=False, default_factory=queue.Queue)


class ConvertLogsUseCase:
    """
    Use case: convert load balancer logs to newline-delimited JSON.

    Records of one file are written in line order, and files are written
    in the order the inputs are given, whichever worker finishes first.

    With skip_parse_errors off, the first parse error stops every worker,
    output written so far is kept, and execute() raises that error. With
    it on, bad lines are handed to on_skip and left out of the output.
    Input and decompression errors always abort.

    Example:
        config = ConvertConfig(log_format=LogFormat.ALB)
        use_case = ConvertLogsUseCase(config, sink=sys.stdout)
        summary = use_case.execute(discover_inputs("logs/"))
    """

    # Seconds between cancellation checks while waiting on a lane.
    POLL_INTERVAL = 0.05

    def __init__(
        self,
        config: ConvertConfig,
        sink: TextIO,
        on_skip: SkipReporter | None = None,
        source_factory: LineSourceFactory = DecompressingLineSource,
    ):
        """
        Initialize the use case.

        Args:
            config: Format, error policy and parallelism
            sink: Text stream receiving the JSON lines; only the writer uses it
            on_skip: Called with each skipped parse error (default: log a warning)
            source_factory: Builds the line source for an input
        """
        self.config = config.validate()
        self.sink = sink
        self.on_skip = on_skip or _log_skipped
        self.source_factory = source_factory

    def execute(self, inputs: Iterable[InputDescriptor]) -> ConversionSummary:
        """
        Run the conversion.

        Args:
            inputs: Inputs in output order; may be a lazy discovery iterator

        Returns:
            ConversionSummary with file, record and skipped-line counts

        Raises:
            ParseError: First parse error, when errors are not skipped
            ElbLogError: Input, permission or decompression failure
        """
        self._inputs: Iterator[InputDescriptor] = iter(inputs)
        self._lanes: queue.Queue = queue.Queue()
        self._pull_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._cancelled = threading.Event()
        self._exhausted = False
        self._next_index = 0
        self._error: BaseException | None = None
        self._summary = ConversionSummary()

        workers = [
            threading.Thread(target=self._work, name=f"elb-worker-{n}", daemon=True)
            for n in range(self.config.workers)
        ]
        logger.debug(
            "Converting %s logs with %d workers", self.config.log_format.value, len(workers)
        )
        for worker in workers:
            worker.start()

        try:
            self._write()
            self.sink.flush()
        except BaseException:
            self._cancelled.set()
            raise
        finally:
            for worker in workers:
                worker.join()

        if self._error is not None:
            raise self._error

        logger.debug(
            "Converted %d files: %d records, %d skipped",
            self._summary.files,
            self._summary.records,
            self._summary.skipped,
        )
        return self._summary

    # -- workers -----------------------------------------------------------

    def _work(self) -> None:
        try:
            while True:
                lane = self._next_lane()
                if lane is None:
                    return
                self._convert_file(lane)
        except Exception as e:
            self._fail(e)
        finally:
            self._finish_lanes()

    def _next_lane(self) -> _Lane | None:
        """Pull the next input and register its lane with the writer."""
        with self._pull_lock:
            if self._exhausted:
                return None
            if self._cancelled.is_set():
                self._finish_lanes_locked()
                return None
            try:
                descriptor = next(self._inputs)
            except StopIteration:
                self._finish_lanes_locked()
                return None
            except ElbLogError as e:
                self._fail(e)
                self._finish_lanes_locked()
                return None

            lane = _Lane(
                index=self._next_index,
                descriptor=descriptor,
                items=queue.Queue(maxsize=self.config.channel_capacity),
            )
            self._next_index += 1
            self._lanes.put(lane)

        with self._state_lock:
            self._summary.files += 1
        return lane

    def _convert_file(self, lane: _Lane) -> None:
        name = lane.descriptor.name
        log_format = self.config.log_format
        lines = None
        logger.debug("Reading %s", name)

        try:
            lines = self.source_factory(lane.descriptor).read_lines()
            for line_number, text in enumerate(lines, 1):
                if self._cancelled.is_set():
                    break

                outcome = parse_raw_line(RawLine(text, name, line_number), log_format)
                if outcome.ok:
                    if not self._send(lane, outcome.record.to_json()):
                        break
                elif self.config.skip_parse_errors:
                    self._skip(outcome.error)
                else:
                    self._fail(outcome.error)
                    break
        except Exception as e:
            # Recorded before the lane ends so the writer never moves past it.
            self._fail(e)
        finally:
            if lines is not None:
                lines.close()
            self._send(lane, _END)

    def _send(self, lane: _Lane, item: object) -> bool:
        """Put an item on a lane, giving up if the run is cancelled."""
        while True:
            try:
                lane.items.put(item, timeout=self.POLL_INTERVAL)
                return True
            except queue.Full:
                if self._cancelled.is_set():
                    return False

    def _skip(self, error: ParseError) -> None:
        with self._state_lock:
            self._summary.skipped += 1
        self.on_skip(error)

    def _fail(self, error: BaseException) -> None:
        with self._state_lock:
            if self._error is None:
                self._error = error
        self._cancelled.set()

    def _finish_lanes(self) -> None:
        with self._pull_lock:
            self._finish_lanes_locked()

    def _finish_lanes_locked(self) -> None:
        if not self._exhausted:
            self._exhausted = True
            self._lanes.put(None)

    # -- writer ------------------------------------------------------------

    def _write(self) -> None:
        while True:
            lane = self._lanes.get()
            if lane is None or not self._drain(lane):
                return

    def _drain(self, lane: _Lane) -> bool:
        """Write one lane to the sink; False if the run was cancelled."""
        while True:
            if self._cancelled.is_set():
                return False
            try:
                item = lane.items.get(timeout=self.POLL_INTERVAL)
            except queue.Empty:
                continue
            if item is _END:
                logger.debug("Finished %s", lane.descriptor.name)
                return True
            self.sink.write(item)
            self.sink.write("\n")
            self._summary.records += 1
