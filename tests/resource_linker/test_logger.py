"""Tests for the linker logger."""

import logging

import pytest

from src.resource_linker.diagnostics import LoggingSink
from src.resource_linker.errors import Diagnostic, ErrorKind, Severity
from src.resource_linker.logger import DiagnosticFormatter, LinkerLogger


class TestLinkerLogger:
    """Test level handling and diagnostic records."""
    
    def setup_method(self):
        self.logger = LinkerLogger("resource_linker.test", "DEBUG")
    
    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError):
            self.logger.set_level("LOUD")
    
    def test_set_level_accepts_lower_case(self):
        self.logger.set_level("warning")
        
        assert self.logger.logger.level == logging.WARNING
    
    @pytest.mark.parametrize("severity,level", [
        (Severity.ERROR, logging.ERROR),
        (Severity.WARNING, logging.WARNING),
    ])
    def test_diagnostic_level_follows_severity(self, caplog, severity, level):
        diagnostic = Diagnostic(ErrorKind.MISSING_SELF, "no self link", severity, "shop.Brand")
        
        with caplog.at_level(logging.DEBUG, logger="resource_linker.test"):
            self.logger.diagnostic(diagnostic)
        
        record = caplog.records[-1]
        assert record.levelno == level
        assert record.getMessage() == "no self link"
        assert record.diagnostic_kind == "MissingSelf"
        assert record.diagnostic_subject == "shop.Brand"
    
    def test_logging_sink_collects_and_logs(self, caplog):
        sink = LoggingSink(self.logger)
        diagnostic = Diagnostic(ErrorKind.NO_HTTP_VERB, "no verb", subject="shop.Product#get")
        
        with caplog.at_level(logging.DEBUG, logger="resource_linker.test"):
            sink.report(diagnostic)
        
        assert sink.diagnostics == [diagnostic]
        assert caplog.records[-1].diagnostic_kind == "NoHttpVerb"


class TestDiagnosticFormatter:
    """Test the rendering of diagnostic records."""
    
    def make_record(self, **extra):
        record = logging.LogRecord("resource_linker", logging.ERROR, __file__, 1, "failed", None, None)
        record.__dict__.update(extra)
        return record
    
    def test_plain_record_unchanged(self):
        formatter = DiagnosticFormatter("%(message)s")
        
        assert formatter.format(self.make_record()) == "failed"
    
    def test_diagnostic_record_carries_kind_and_subject(self):
        formatter = DiagnosticFormatter("%(message)s")
        record = self.make_record(diagnostic_kind="TooManySelf", diagnostic_subject="shop.Product#a")
        
        assert formatter.format(record) == "failed [TooManySelf @ shop.Product#a]"
    
    def test_diagnostic_record_without_subject(self):
        formatter = DiagnosticFormatter("%(message)s")
        record = self.make_record(diagnostic_kind="MissingSelf", diagnostic_subject=None)
        
        assert formatter.format(record) == "failed [MissingSelf]"
