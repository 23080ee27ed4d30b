'''treescan CLI 진입점./treescan CLI entrypoint.'''

from __future__ import annotations

import json
import queue
import sys
import threading
from pathlib import Path
from typing import Any, Dict, Sequence

import click

from .config import ScannerConfig
from .exceptions import ScanConfigError
from .factory import FileEntryFactory
from .handle import ScanHandle
from .json_stream import JsonArrayWriter
from .logging import configure_logging
from .models import FileEntry, ProgressEvent
from .scheduler import Scanner
from .signals import SealableLatch, ThrottledMonitor

DEFAULT_QUEUE_SIZE = 1024


def _print_progress(event: ProgressEvent) -> None:
    '''진행 상황을 출력합니다./Print progress updates to stderr.'''

    click.echo(f"queued={event.queued} path={event.current_path or '-'}", err=True)


def _cli_overrides(
    include: Sequence[str],
    exclude: Sequence[str],
    include_hidden: bool | None,
    include_os_files: bool | None,
    follow_symlinks: bool | None,
    max_depth: int | None,
) -> Dict[str, Any]:
    '''명령행 옵션을 설정 매핑으로./Turn command line flags into scanner options.'''

    options: Dict[str, Any] = {}
    if include:
        options['includePattern'] = list(include)
    if exclude:
        options['excludePattern'] = list(exclude)
    if include_hidden is not None:
        options['includeHiddenFiles'] = include_hidden
    if include_os_files is not None:
        options['includeOSFiles'] = include_os_files
    if follow_symlinks is not None:
        options['followSymlinks'] = follow_symlinks
    if max_depth is not None:
        options['maxDepth'] = max_depth
    return options


def _handle_summary(handle: ScanHandle) -> Dict[str, object]:
    '''작업 결과 요약./Summarise one job outcome.'''

    payload = handle.stats.to_payload()
    if handle.cancelled():
        payload['status'] = 'cancelled'
        return payload
    error = handle.exception()
    payload['status'] = 'failed' if error is not None else 'completed'
    if error is not None:
        payload['error'] = str(error)
    return payload


def _seal_when_done(handles: Sequence[ScanHandle], latch: SealableLatch) -> None:
    '''모든 작업 완료 시 래치를 봉인./Seal the latch once every handle is done.'''

    lock = threading.Lock()
    remaining = len(handles)

    def _on_done(_handle: ScanHandle) -> None:
        nonlocal remaining
        with lock:
            remaining -= 1
            finished = remaining == 0
        if finished:
            latch.seal()

    if not handles:
        latch.seal()
    for handle in handles:
        handle.add_done_callback(_on_done)


@click.group()
@click.option('--verbose', is_flag=True, help='Verbose logs')
@click.option('--quiet', is_flag=True, help='Quiet logs')
@click.option(
    '--log-file',
    type=click.Path(path_type=Path),
    default=None,
    help='Log file path (stderr when omitted)',
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, log_file: Path | None) -> None:
    '''디렉터리 트리 스캐너 CLI./Directory tree scanner CLI.'''

    level = 'INFO'
    if verbose:
        level = 'DEBUG'
    if quiet:
        level = 'WARNING'
    configure_logging(log_file, level=level)
    ctx.obj = {'log_file': log_file}


@cli.command()
@click.argument('roots', nargs=-1, required=True, type=click.Path(path_type=Path))
@click.option(
    '--config-file',
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help='YAML options file',
)
@click.option('--include', 'include', multiple=True, help='Glob for files to report')
@click.option('--exclude', 'exclude', multiple=True, help='Glob for files and directories to skip')
@click.option('--include-hidden/--ignore-hidden', default=None, help='Hidden file policy')
@click.option('--include-os-files/--ignore-os-files', default=None, help='OS artifact policy')
@click.option('--follow-symlinks/--no-follow-symlinks', default=None, help='Symlink policy')
@click.option('--max-depth', type=click.IntRange(min=0), default=None, help='Recursion limit')
@click.option(
    '--queue-size',
    type=click.IntRange(min=1),
    default=DEFAULT_QUEUE_SIZE,
    show_default=True,
    help='Bounded queue capacity',
)
@click.option(
    '--output',
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help='JSON array output (JSON lines on stdout when omitted)',
)
@click.option('--progress', is_flag=True, help='Print throttled progress to stderr')
@click.pass_context
def scan(
    ctx: click.Context,
    roots: Sequence[Path],
    config_file: Path | None,
    include: Sequence[str],
    exclude: Sequence[str],
    include_hidden: bool | None,
    include_os_files: bool | None,
    follow_symlinks: bool | None,
    max_depth: int | None,
    queue_size: int,
    output: Path | None,
    progress: bool,
) -> None:
    '''디렉터리 트리를 스캔한다./Scan directory trees.'''

    entries: 'queue.Queue[FileEntry]' = queue.Queue(maxsize=queue_size)
    latch = SealableLatch()
    monitor = ThrottledMonitor(_print_progress) if progress else None
    overrides = _cli_overrides(
        include, exclude, include_hidden, include_os_files, follow_symlinks, max_depth
    )
    with Scanner(FileEntryFactory(), entries, latch, monitor) as scanner:
        try:
            if config_file is not None:
                scanner.configure(ScannerConfig.from_file(config_file))
            scanner.configure(overrides)
        except ScanConfigError as exc:
            raise click.ClickException(str(exc)) from exc
        try:
            writer = JsonArrayWriter(output) if output is not None else None
        except OSError as exc:
            raise click.ClickException(f'cannot open output {output}: {exc}') from exc
        handles = scanner.scan(list(roots))
        _seal_when_done(handles, latch)
        try:
            try:
                while latch.wait():
                    payload = entries.get().to_payload()
                    if writer is not None:
                        writer.write(payload)
                    else:
                        click.echo(json.dumps(payload, ensure_ascii=False))
            finally:
                if writer is not None:
                    writer.close()
        except KeyboardInterrupt:
            scanner.shutdown_now()
            raise click.Abort()
        except OSError as exc:
            scanner.shutdown_now()
            raise click.ClickException(f'cannot write entries: {exc}') from exc
        summaries = [_handle_summary(handle) for handle in handles]
        queued = scanner.queued()
    click.echo(
        json.dumps(
            {'stage': 'scan', 'queued': queued, 'roots': summaries},
            ensure_ascii=False,
        )
    )
    if any(item['status'] != 'completed' for item in summaries):
        ctx.exit(1)


def main(argv: Sequence[str] | None = None) -> int:
    '''CLI 진입점을 실행한다./Execute CLI entry point.'''

    argv = argv if argv is not None else sys.argv[1:]
    try:
        result = cli.main(args=list(argv), prog_name='treescan', standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo('Aborted!', err=True)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
