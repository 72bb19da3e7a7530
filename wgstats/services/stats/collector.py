import logging
from typing import Callable, Optional

from wgstats.services.command import DUMP_ARGS, SHOW_ARGS, CommandFailure, run_wg

from .emitter import Accumulator, emit
from .parser import PARSERS
from .records import LINE_FORMAT, InterfaceRecord, ParseResult, ParseWarning

logger = logging.getLogger(__name__)

FORMAT_ARGS = {"dump": DUMP_ARGS, "show": SHOW_ARGS}

Runner = Callable[..., bytes]


class WireguardCollector:
    """
    Один цикл сбора: запустить wg, разобрать вывод, отдать метрики в acc.
    Между вызовами gather состояние не хранится.
    """

    def __init__(
        self,
        binary: str = "/usr/bin/wg",
        timeout: float = 1.0,
        use_sudo: bool = False,
        output_format: str = "dump",
        container: str = "",
        docker_bin: str = "docker",
        interfaces: Optional[list[str]] = None,
        report_malformed_lines: bool = True,
        parse_partial_output: bool = False,
        run: Runner = run_wg,
    ):
        if output_format not in PARSERS:
            raise ValueError(f"unknown wg output format: {output_format!r}")
        self.binary = binary
        self.timeout = timeout
        self.use_sudo = use_sudo
        self.output_format = output_format
        self.container = container
        self.docker_bin = docker_bin
        self.interfaces = set(interfaces or [])
        self.report_malformed_lines = report_malformed_lines
        self.parse_partial_output = parse_partial_output
        self.run = run

    @classmethod
    def from_settings(cls, settings) -> "WireguardCollector":
        return cls(
            binary=settings.WG_BINARY,
            timeout=settings.WG_TIMEOUT,
            use_sudo=settings.WG_USE_SUDO,
            output_format=settings.WG_FORMAT,
            container=settings.WG_DOCKER_CONTAINER,
            docker_bin=settings.DOCKER_BIN,
            interfaces=settings.WG_INTERFACES,
            report_malformed_lines=settings.WG_REPORT_MALFORMED_LINES,
            parse_partial_output=settings.WG_PARSE_PARTIAL_OUTPUT,
        )

    def parse(self, raw: bytes) -> ParseResult:
        return PARSERS[self.output_format](raw)

    def _wanted(self, record) -> bool:
        if not self.interfaces:
            return True
        name = record.name if isinstance(record, InterfaceRecord) else record.interface
        return name in self.interfaces

    def _wanted_warning(self, warning: ParseWarning) -> bool:
        # строки без известного интерфейса репортим всегда
        if not self.interfaces or warning.interface is None:
            return True
        return warning.interface in self.interfaces

    def _report(self, acc: Accumulator, result: ParseResult) -> int:
        emitted = 0
        for warning in result.warnings:
            if not self._wanted_warning(warning):
                logger.debug("skipping warning for filtered interface: %s", warning)
                continue
            if warning.kind == LINE_FORMAT and not self.report_malformed_lines:
                logger.debug("skipping line: %s", warning)
                continue
            logger.warning("wg output: %s", warning)
            acc.add_error(warning)

        for record in result.records:
            if self._wanted(record):
                emit(acc, record)
                emitted += 1
        return emitted

    def gather(self, acc: Accumulator) -> int:
        """
        Возвращает число отправленных метрик.
        CommandFailure пробрасывается наружу: цикл считается неудачным.
        """
        try:
            out = self.run(
                self.binary,
                self.timeout,
                self.use_sudo,
                args=FORMAT_ARGS[self.output_format],
                container=self.container,
                docker_bin=self.docker_bin,
            )
        except CommandFailure as e:
            if self.parse_partial_output and e.output:
                emitted = self._report(acc, self.parse(e.output))
                logger.warning("wg failed, emitted %d metrics from partial output", emitted)
            raise

        emitted = self._report(acc, self.parse(out))
        logger.debug("gathered %d wireguard metrics", emitted)
        return emitted
