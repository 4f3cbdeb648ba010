"""
analyzers/byovpc/reporter.py - 리포트 출력

- 콘솔: rich 테이블 (심각도, 검사, 리소스, 메시지) + 심각도별 요약
- JSON: Report.to_dict()

출력은 완성된 Report에 대해서만 수행되며, 수집/검사 도중에는 아무것도 출력하지 않습니다.
"""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path

from rich.console import Console

from cli.ui.console import create_table
from core.io.config import OutputConfig

from .findings import Report, Severity

logger = logging.getLogger(__name__)

SEVERITY_STYLES = {
    Severity.PASS: "green",
    Severity.WARN: "yellow",
    Severity.FAIL: "bold red",
}


def _styled(severity: Severity) -> str:
    style = SEVERITY_STYLES[severity]
    return f"[{style}]{severity.value.upper()}[/{style}]"


def render_console(report: Report, console: Console, show_passed: bool = True) -> None:
    """콘솔 테이블 출력

    Args:
        report: 최종 리포트
        console: 출력 대상 콘솔
        show_passed: False면 PASS 항목은 테이블에서 제외 (요약에는 포함)
    """
    table = create_table(f"BYOVPC 검사 결과: {report.vpc_id}", ["Severity", "Check", "Resource", "Message"])
    for finding in report.findings:
        if not show_passed and finding.severity == Severity.PASS:
            continue
        table.add_row(
            _styled(finding.severity),
            finding.check_name,
            finding.subject_resource_id,
            finding.message,
        )

    if table.row_count:
        console.print(table)
    render_summary(report, console)


def render_summary(report: Report, console: Console) -> None:
    """심각도별 건수와 전체 상태 한 줄 출력"""
    counts = report.counts()
    parts = [f"{_styled(s)} {counts[s]}" for s in (Severity.FAIL, Severity.WARN, Severity.PASS)]
    console.print(f"전체 상태: {_styled(report.status)}  ({', '.join(parts)})")


def render_json(report: Report) -> str:
    """JSON 문자열"""
    return json.dumps(report.to_dict(), ensure_ascii=False, indent=2)


def write_report(report: Report, output: OutputConfig, console: Console) -> None:
    """출력 설정에 따라 리포트 출력

    output_file이 있으면 파일로 저장하고 콘솔에는 요약만 출력합니다.
    """
    if output.should_output_json():
        text = render_json(report)
        if output.output_file:
            _write_file(output.output_file, text + "\n")
            if not output.quiet:
                render_summary(report, console)
        else:
            console.out(text, highlight=False)
        return

    if output.output_file:
        file_console = Console(record=True, width=160, color_system=None, file=io.StringIO())
        render_console(report, file_console)
        _write_file(output.output_file, file_console.export_text())
        render_summary(report, console)
        return

    if output.quiet:
        render_summary(report, console)
    else:
        render_console(report, console)


def _write_file(path: str, text: str) -> None:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8")
    logger.info(f"리포트 저장: {target}")
