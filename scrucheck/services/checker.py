"""
Streaming identifier checker.

Reads lines one at a time: decode -> validate -> aggregate -> (periodic)
report. Rejected lines are counted and skipped; the last accepted identifier
stays the baseline for the next comparison.
"""

from typing import Callable, Iterable, Optional, Union

from scrucheck.context.encoding import get_decoder
from scrucheck.context.statistics import Aggregator, Status
from scrucheck.context.validation import OrderValidator
from scrucheck.errors import MalformedTokenError, NoValidRecordError
from scrucheck.models import Identifier, RejectReason, Report, ValidationOutcome
from scrucheck.services.reporter import render
from scrucheck.settings import CheckerSettings

ReportSink = Callable[[Report], None]
ErrorSink = Callable[[ValidationOutcome], None]

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


def _ignore(_):
    pass


class IdentifierChecker:
    """
    Checks a stream of identifiers one line at a time.

    Example:
        checker = IdentifierChecker(CheckerSettings(), report_sink=print_report)
        for line in lines:
            checker.feed(line)
        exit_code = checker.finish()
    """

    def __init__(self, settings: Optional[CheckerSettings] = None,
                 report_sink: ReportSink = _ignore, error_sink: ErrorSink = _ignore):
        self.settings = settings or CheckerSettings()
        self.decoder = get_decoder(self.settings.fmt)
        self.validator = OrderValidator(self.settings.fmt)
        self.aggregator = Aggregator(self.settings.fmt)
        self.report_sink = report_sink
        self.error_sink = error_sink

    @property
    def status(self) -> Status:
        return self.aggregator.status

    @property
    def baseline(self) -> Optional[Identifier]:
        """Last accepted identifier."""
        return self.aggregator.prev

    def feed(self, line: Union[bytes, str]) -> ValidationOutcome:
        """Process one input line and return how it was classified."""
        if isinstance(line, str):
            token = line.rstrip("\r\n")
        else:
            token = line.rstrip(b"\r\n")

        try:
            curr = self.decoder.decode(token)
        except MalformedTokenError as exc:
            return self._reject(ValidationOutcome.rejected(RejectReason.MALFORMED_TOKEN, str(exc)))

        outcome = self.validator.validate(self.aggregator.prev, curr)
        if not outcome.accepted:
            return self._reject(outcome)

        self.aggregator.observe(curr)
        if self.aggregator.report_due(curr.timestamp, self.settings.report_interval_ms):
            self.report_sink(self.render())
        return outcome

    def _reject(self, outcome: ValidationOutcome) -> ValidationOutcome:
        self.aggregator.count_error()
        self.error_sink(outcome)
        return outcome

    def render(self) -> Report:
        return render(self.status, self.settings.fmt, self.settings.clock)

    def finish(self) -> int:
        """
        Emit the final report and return the exit status.

        Raises:
            NoValidRecordError: no line was accepted
        """
        if self.status.n_processed == 0:
            raise NoValidRecordError()

        self.report_sink(self.render())
        return EXIT_SUCCESS if self.status.n_errors == 0 else EXIT_FAILURE


def run(lines: Iterable[Union[bytes, str]], settings: Optional[CheckerSettings] = None,
        report_sink: ReportSink = _ignore, error_sink: ErrorSink = _ignore) -> IdentifierChecker:
    """
    Feed every line to a new checker.

    Returns the checker so the caller can call finish() and inspect status.
    """
    checker = IdentifierChecker(settings, report_sink=report_sink, error_sink=error_sink)
    for line in lines:
        checker.feed(line)
    return checker
