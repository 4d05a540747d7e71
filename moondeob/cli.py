"""CLI interface for moondeob."""

import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from tqdm import tqdm

from moondeob import __version__
from moondeob.config import Config
from moondeob.core import DeobfuscationResult, Deobfuscator
from moondeob.debug import debug_log, setup_debug_logger
from moondeob.examples import EXAMPLE_CODES, EXAMPLE_DESCRIPTIONS

console = Console()


def _default_output_path(file_path: Path, config: Config) -> Path:
    """Work out where the deobfuscated file goes when no path is given."""
    name = file_path.stem + config.output_suffix
    if config.output_dir:
        return config.output_dir / name
    return file_path.with_name(name)


def _report_path(output_path: Path) -> Path:
    return output_path.with_name(output_path.name + ".report.json")


def _statistics_table(result: DeobfuscationResult, title: str = "Analysis Stats") -> Table:
    """Render statistics as a two-column table."""
    stats = result.statistics
    table = Table(title=title)
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Original Lines", str(stats.original_line_count))
    table.add_row("Final Lines", str(stats.final_line_count))
    table.add_row("Variables Renamed", str(stats.identifiers_renamed))
    table.add_row("Strings Decoded", str(stats.strings_decoded))
    table.add_row("Functions Renamed", str(stats.functions_renamed))
    table.add_row("Complexity", stats.complexity.value)
    table.add_row("Confidence", f"{stats.confidence}%")
    return table


def _rename_table(title: str, renames: dict[str, str], old_label: str, new_label: str) -> Table:
    table = Table(title=title)
    table.add_column(old_label)
    table.add_column(new_label)
    for old_name, new_name in renames.items():
        table.add_row(escape(old_name), escape(new_name))
    return table


def _print_warnings(result: DeobfuscationResult) -> None:
    for warning in result.warnings:
        console.print(f"[yellow]Warning: {escape(warning)}[/yellow]")


def process_file(
    file_path: Path,
    config: Config,
    output_path: Optional[Path] = None,
    deobfuscator: Optional[Deobfuscator] = None,
) -> dict:
    """Deobfuscate a single file and write the result.

    Args:
        file_path: Path to the obfuscated file
        config: Configuration
        output_path: Optional output path
        deobfuscator: Engine to reuse across files

    Returns:
        Processing statistics
    """
    deobfuscator = deobfuscator or Deobfuscator(config)
    debug_log("info", f"Processing file: {file_path}")

    source_code = file_path.read_text(encoding="utf-8")
    result = deobfuscator.deobfuscate(source_code)

    if output_path is None:
        output_path = _default_output_path(file_path, config)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.deobfuscated_code, encoding="utf-8")
    debug_log("info", f"Saved output to: {output_path}")

    if config.write_report:
        report_path = _report_path(output_path)
        report = {
            "input_file": str(file_path),
            "output_file": str(output_path),
            "statistics": result.statistics.to_dict(),
            "warnings": result.warnings,
            "identifier_renames": result.identifier_renames,
            "function_renames": result.function_renames,
        }
        report_path.write_text(json.dumps(report, ensure_ascii=False, indent=2), encoding="utf-8")
        debug_log("info", f"Saved report to: {report_path}")

    stats = {"file": str(file_path), "output": str(output_path)}
    stats.update(result.statistics.to_dict())
    stats["warnings"] = list(result.warnings)
    return stats


def process_directory(
    dir_path: Path,
    config: Config,
    output_dir: Optional[Path] = None,
) -> list[dict]:
    """Process all matching script files in a directory.

    Args:
        dir_path: Path to directory
        config: Configuration
        output_dir: Optional output directory mirroring the input tree

    Returns:
        List of processing statistics for each file
    """
    suffix = config.output_suffix
    script_files = sorted(
        path for path in dir_path.rglob(config.file_glob)
        if path.is_file() and not path.name.endswith(suffix)
    )
    console.print(f"[blue]Found {len(script_files)} files in {escape(str(dir_path))}[/blue]")

    debug_log("info", f"Processing directory: {dir_path}", {
        "file_count": len(script_files),
        "files": [str(f) for f in script_files[:10]],  # First 10 files
    })

    deobfuscator = Deobfuscator(config)
    results = []
    for script_file in tqdm(script_files, desc="Deobfuscating", unit="file"):
        out_path = None
        if output_dir:
            rel_path = script_file.relative_to(dir_path)
            out_path = output_dir / rel_path.with_name(rel_path.stem + suffix)

        try:
            results.append(process_file(script_file, config, out_path, deobfuscator=deobfuscator))
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[red]Error processing {escape(str(script_file))}: {escape(str(e))}[/red]")
            debug_log("error", f"Failed to process {script_file}", {"error": str(e)})
            results.append({"file": str(script_file), "error": str(e)})

    return results


@click.group()
@click.version_option(version=__version__)
def main():
    """Moondeob - heuristic Lua deobfuscation tool."""
    pass


@main.command()
@click.argument("input_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", "output_path", type=click.Path(path_type=Path), help="Output file/directory path")
@click.option("--stdout", "to_stdout", is_flag=True, help="Print the deobfuscated code instead of writing a file")
@click.option("--report", is_flag=True, help="Write a JSON statistics report next to each output")
@click.option("--warnings", "report_warnings", is_flag=True, help="Report escapes left undecoded")
@click.option("--fixed-point", is_flag=True, help="Repeat simplification until nothing changes")
@click.option("--debug", is_flag=True, help="Enable debug logging to file")
@click.option("--debug-file", type=click.Path(path_type=Path), help="Debug log file path (default: moondeob_debug_TIMESTAMP.log)")
def deobfuscate(
    input_path: Path,
    output_path: Optional[Path],
    to_stdout: bool,
    report: bool,
    report_warnings: bool,
    fixed_point: bool,
    debug: bool,
    debug_file: Optional[Path],
):
    """Deobfuscate Lua code.

    INPUT_PATH can be a script file or a directory containing script files.
    """
    if debug:
        setup_debug_logger(debug_file)
        console.print("[yellow]Debug logging enabled[/yellow]")
        debug_log("info", "Debug logging started", {
            "input_path": str(input_path),
            "output_path": str(output_path) if output_path else None,
            "report": report,
            "report_warnings": report_warnings,
            "fixed_point": fixed_point,
        })

    # Only override .env values if CLI flags are explicitly set
    config_kwargs = {}
    if report:
        config_kwargs["write_report"] = True
    if report_warnings:
        config_kwargs["report_warnings"] = True
    if fixed_point:
        config_kwargs["simplify_to_fixed_point"] = True

    config = Config(**config_kwargs)

    debug_log("info", "Configuration loaded", config.model_dump(mode="json"))

    if to_stdout:
        if not input_path.is_file():
            raise click.UsageError("--stdout requires a single input file")
        try:
            source_code = input_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise SystemExit(1)
        result = Deobfuscator(config).deobfuscate(source_code)
        click.echo(result.deobfuscated_code)
        _print_warnings(result)
        return

    if input_path.is_file():
        try:
            results = [process_file(input_path, config, output_path)]
        except (OSError, UnicodeDecodeError) as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise SystemExit(1)
    else:
        results = process_directory(input_path, config, output_path)

    # Print summary
    table = Table(title="Processing Summary")
    table.add_column("File")
    table.add_column("Renamed")
    table.add_column("Decoded")
    table.add_column("Functions")
    table.add_column("Confidence")
    table.add_column("Status")

    for r in results:
        status = "✓" if "error" not in r else "✗"
        table.add_row(
            escape(r.get("file", "unknown")),
            str(r.get("identifiers_renamed", 0)),
            str(r.get("strings_decoded", 0)),
            str(r.get("functions_renamed", 0)),
            f"{r['confidence']}%" if "confidence" in r else "-",
            status,
        )

    console.print(table)

    debug_log("info", "Processing complete", {"results": results})

    if any("error" in r for r in results):
        raise SystemExit(1)


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def analyze(input_path: Path):
    """Show what would be renamed and decoded, without writing anything."""
    source_code = input_path.read_text(encoding="utf-8")
    result = Deobfuscator(Config()).deobfuscate(source_code)

    console.print(f"[blue]File:[/blue] {escape(str(input_path))}")
    console.print(_rename_table("Identifier Renames", result.identifier_renames, "Original", "Renamed"))
    console.print(_rename_table("Function Renames", result.function_renames, "Original", "Renamed"))
    console.print(_rename_table("Decoded Escapes", result.decoded_strings, "Escape", "Character"))
    console.print(_statistics_table(result))
    _print_warnings(result)


@main.command()
def examples():
    """List the bundled example samples."""
    table = Table(title="Examples")
    table.add_column("Name")
    table.add_column("Description")
    for name, description in EXAMPLE_DESCRIPTIONS.items():
        table.add_row(name, description)
    console.print(table)


@main.command()
@click.argument("name", type=click.Choice(sorted(EXAMPLE_CODES)))
def example(name: str):
    """Deobfuscate a bundled example and print the result."""
    result = Deobfuscator(Config()).deobfuscate(EXAMPLE_CODES[name])
    console.print(f"[green]{escape(name)}[/green]: {escape(EXAMPLE_DESCRIPTIONS[name])}\n")
    click.echo(result.deobfuscated_code)
    console.print(_statistics_table(result))
    _print_warnings(result)


if __name__ == "__main__":
    main()
