from __future__ import annotations

import sys
from dataclasses import replace

from content_builder.config import get_settings
from content_builder.core.logging import TruncatedFormatter, _build_handlers, _rotated_name


def test_rotated_backups_use_dash_suffix() -> None:
  assert _rotated_name("/var/log/content_builder_1.log.3") == "/var/log/content_builder_1.log-3"
  assert _rotated_name("/var/log/content_builder_1.log") == "/var/log/content_builder_1.log"


def test_handlers_write_under_configured_dir(tmp_path) -> None:
  settings = replace(get_settings(), log_dir=tmp_path / "logs", log_max_bytes=1024, log_backup_count=2)
  stream, file_handler, log_path = _build_handlers(settings)

  try:
    assert log_path.parent == tmp_path / "logs"
    assert log_path.exists()
    assert file_handler.maxBytes == 1024
    assert file_handler.backupCount == 2
    assert isinstance(stream.formatter, TruncatedFormatter)
  finally:
    file_handler.close()


def test_truncated_formatter_keeps_tail_of_traceback() -> None:
  def nested(depth: int) -> None:
    if depth == 0:
      raise ValueError("deep failure")
    nested(depth - 1)

  try:
    nested(10)
  except ValueError:
    exc_info = sys.exc_info()

  rendered = TruncatedFormatter().formatException(exc_info)
  assert rendered.startswith("Traceback")
  assert "    ...\n" in rendered
  assert rendered.rstrip().endswith("ValueError: deep failure")
