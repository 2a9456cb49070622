"""
peptidescope Command Line Interface.

Profiles peptide sequences, scores model consensus and inspects the residue
constant tables. Built with Click, with Rich for terminal output.

Usage:
    peptidescope profile GIGKFLHSAKKFGKAFVGEIMNS
    peptidescope profile -f candidates.fasta --scores predictions.json --min-score 0.5
    peptidescope consensus --xgboost 80 --random-forest 70
    peptidescope charge-curve ILPWKWPWWPWRR
    peptidescope tables
"""

from __future__ import annotations

import csv
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import numpy as np
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .. import __version__

# Initialize rich console for pretty output
console = Console()

logger = logging.getLogger(__name__)

PROFILE_COLUMNS = [
    "id",
    "sequence",
    "length",
    "molecular_weight",
    "hydrophobicity",
    "net_charge",
    "isoelectric_point",
    "boman_index",
    "consensus",
]


def _configure_logging(verbose: bool, quiet: bool):
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(version=__version__, prog_name="peptidescope")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.pass_context
def cli(ctx, verbose: bool, quiet: bool):
    """
    peptidescope: physicochemical profiling and consensus scoring of peptides.

    \b
    • Molecular weight, hydrophobicity, net charge, pI and Boman index
    • Consensus over up to five activity classifiers
    • Filtering by score, length and excluded residues

    Run 'peptidescope COMMAND --help' for command-specific help.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    _configure_logging(verbose, quiet)


def _load_scores(path: Path):
    """
    Load model scores from JSON.

    Accepts either the prediction service response (a list of records with
    a 'Peptido' field) or a mapping from sequence to {model_name: score}.
    """
    from ..consensus import scores_by_sequence
    from ..core.models import ModelScoreSet

    with open(path) as f:
        data = json.load(f)

    if isinstance(data, list):
        bad = [type(entry).__name__ for entry in data if not isinstance(entry, dict)]
        if bad:
            raise click.BadParameter(
                f"prediction records must be objects, got {', '.join(sorted(set(bad)))}",
                param_hint="--scores",
            )
        return scores_by_sequence(data)
    if isinstance(data, dict):
        bad = [seq for seq, values in data.items() if not isinstance(values, dict)]
        if bad:
            raise click.BadParameter(
                f"scores for {', '.join(bad)} must be objects of {{model: score}}",
                param_hint="--scores",
            )
        return {
            seq.upper(): ModelScoreSet.from_mapping(values)
            for seq, values in data.items()
        }
    raise click.BadParameter(
        f"expected a list of prediction records or a mapping, got {type(data).__name__}",
        param_hint="--scores",
    )


def _record_row(record) -> dict:
    p = record.profile
    return {
        "id": record.id,
        "sequence": p.sequence,
        "length": p.length,
        "molecular_weight": round(p.molecular_weight, 5),
        "hydrophobicity": round(p.hydrophobicity, 4),
        "net_charge": round(p.net_charge, 4),
        "isoelectric_point": round(p.isoelectric_point, 3),
        "boman_index": round(p.boman_index, 4),
        "consensus": record.consensus_score,
    }


@cli.command("profile")
@click.argument("sequences", nargs=-1)
@click.option("--file", "-f", "fasta", type=click.Path(exists=True), help="FASTA file of peptides")
@click.option(
    "--scores",
    type=click.Path(exists=True),
    help="JSON with per-model scores (prediction response or {sequence: {model: score}})",
)
@click.option("--source", help="Provenance label stored on every record")
@click.option("--min-score", type=click.FloatRange(0, 1), default=0.0, help="Minimum consensus score")
@click.option("--min-length", type=int, default=0, help="Minimum peptide length")
@click.option("--max-length", type=int, default=None, help="Maximum peptide length")
@click.option("--exclude", default="", help="Drop peptides containing any of these residues")
@click.option(
    "--drop-unscored",
    is_flag=True,
    help="With --min-score, drop peptides whose consensus is unknown",
)
@click.option("--ph", type=click.FloatRange(0, 14), default=7.0, help="pH for the net charge")
@click.option("--workers", type=int, default=None, help="Threads used for profiling")
@click.option(
    "--format", "fmt",
    type=click.Choice(["table", "json", "csv", "tsv"]),
    default="table",
    help="Output format",
)
@click.option("--output", "-o", type=click.Path(), help="Write results to this file")
@click.pass_context
def profile_cmd(
    ctx,
    sequences: tuple,
    fasta: Optional[str],
    scores: Optional[str],
    source: Optional[str],
    min_score: float,
    min_length: int,
    max_length: Optional[int],
    exclude: str,
    drop_unscored: bool,
    ph: float,
    workers: Optional[int],
    fmt: str,
    output: Optional[str],
):
    """
    Profile peptide sequences.

    SEQUENCES are given on the command line and/or read from a FASTA file.
    Both are upper-cased and stripped of whitespace before profiling.
    When --scores is supplied each peptide also gets a consensus score;
    peptides missing from the scores file are reported as 'unknown'.

    \b
    Examples:
        peptidescope profile GIGKFLHSAKKFGKAFVGEIMNS ILPWKWPWWPWRR
        peptidescope profile -f generated.fasta --scores predictions.json --format csv
    """
    from .. import build_records
    from ..core.sequence import SequenceError, clean_sequence, parse_fasta
    from ..filters import FilterCriteria, filter_records
    from ..properties import PhysicochemicalProfiler, ProfilerConfig

    pairs = [("", clean_sequence(seq)) for seq in sequences]

    if fasta:
        try:
            pairs.extend(parse_fasta(Path(fasta)))
        except (OSError, SequenceError) as e:
            console.print(f"[red]✗ Error loading sequences:[/red] {e}")
            sys.exit(1)

    if not pairs:
        console.print("[yellow]No sequence provided. Use --help for usage.[/yellow]")
        sys.exit(1)

    score_index = None
    if scores:
        try:
            score_index = _load_scores(Path(scores))
        except (OSError, ValueError, click.BadParameter) as e:
            console.print(f"[red]✗ Error loading scores:[/red] {e}")
            sys.exit(1)

    try:
        criteria = FilterCriteria(
            min_score=min_score,
            min_length=min_length,
            max_length=max_length,
            excluded_residues=frozenset(c for c in exclude.upper() if c.isalpha()),
            keep_unscored=not drop_unscored,
        )
    except ValueError as e:
        raise click.BadParameter(str(e))

    profiler = PhysicochemicalProfiler(ProfilerConfig(ph=ph))
    records = build_records(
        pairs, scores=score_index, source=source, profiler=profiler, max_workers=workers,
    )
    kept = filter_records(records, criteria)
    logger.info(f"{len(kept)}/{len(records)} peptide(s) pass the filters")

    if fmt == "table":
        _print_profile_table(kept, ph)
        return

    rows = [_record_row(r) for r in kept]

    handle = open(output, "w", newline="") if output else sys.stdout
    try:
        if fmt == "json":
            json.dump([r.model_dump(mode="json") for r in kept], handle, indent=2)
            handle.write("\n")
        else:
            writer = csv.DictWriter(
                handle,
                fieldnames=PROFILE_COLUMNS,
                delimiter="," if fmt == "csv" else "\t",
            )
            writer.writeheader()
            for row in rows:
                # Unknown consensus is written as an empty cell, never 0
                writer.writerow({**row, "consensus": "" if row["consensus"] is None else row["consensus"]})
    finally:
        if output:
            handle.close()

    if output and not ctx.obj.get("quiet"):
        console.print(f"[green]✓[/green] Results saved to: {output}")


def _print_profile_table(records, ph: float):
    table = Table(title="Peptide Profiles", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="bold")
    table.add_column("Sequence")
    table.add_column("Len", justify="right")
    table.add_column("MW (Da)", justify="right")
    table.add_column("Hydro", justify="right")
    table.add_column(f"Charge (pH {ph:g})", justify="right")
    table.add_column("pI", justify="right")
    table.add_column("Boman", justify="right")
    table.add_column("Consensus", justify="right")

    for record in records:
        p = record.profile
        if record.consensus is None:
            consensus_cell = "-"
        elif record.consensus.is_known:
            consensus_cell = record.consensus.display()
        else:
            consensus_cell = "[yellow]unknown[/yellow]"
        table.add_row(
            record.id,
            p.sequence,
            str(p.length),
            f"{p.molecular_weight:.2f}",
            f"{p.hydrophobicity:.3f}",
            f"{p.net_charge:+.2f}",
            f"{p.isoelectric_point:.2f}",
            f"{p.boman_index:.2f}",
            consensus_cell,
        )

    console.print(table)


@cli.command("consensus")
@click.option("--xgboost", type=click.FloatRange(0, 100), help="Gradient-boosted trees score (0-100)")
@click.option("--random-forest", type=click.FloatRange(0, 100), help="Random forest score (0-100)")
@click.option("--neural-network", type=click.FloatRange(0, 100), help="Neural network score (0-100)")
@click.option("--decision-tree", type=click.FloatRange(0, 100), help="Decision tree score (0-100)")
@click.option(
    "--logistic-regression", type=click.FloatRange(0, 100), help="Logistic regression score (0-100)"
)
def consensus_cmd(
    xgboost: Optional[float],
    random_forest: Optional[float],
    neural_network: Optional[float],
    decision_tree: Optional[float],
    logistic_regression: Optional[float],
):
    """
    Combine per-model scores into a consensus.

    Omitted models count as 'no result', not as 0.

    \b
    Examples:
        peptidescope consensus --xgboost 80 --random-forest 70
    """
    from ..consensus import consensus
    from ..core.models import ModelName, ModelScoreSet

    result = consensus(ModelScoreSet(
        xgboost=xgboost,
        random_forest=random_forest,
        neural_network=neural_network,
        decision_tree=decision_tree,
        logistic_regression=logistic_regression,
    ))

    table = Table(show_header=True, header_style="bold")
    table.add_column("Model")
    table.add_column("Score", justify="right")
    for model in ModelName:
        value = result.per_model_scores.get(model)
        table.add_row(model.value, "no result" if value is None else f"{value:g}")
    console.print(table)

    console.print(
        f"[bold]Consensus:[/bold] {result.display()} "
        f"({result.n_models}/{len(ModelName)} models)"
    )


@cli.command("charge-curve")
@click.argument("sequence")
@click.option("--step", type=click.FloatRange(min=0.01), default=1.0, help="pH step (default: 1.0)")
def charge_curve_cmd(sequence: str, step: float):
    """
    Print the net charge of SEQUENCE from pH 0 to 14 and its pI.
    """
    from ..core.sequence import clean_sequence
    from ..properties import charge_curve, isoelectric_point

    sequence = clean_sequence(sequence)
    ph_values = np.arange(0.0, 14.0 + step / 2, step)
    charges = charge_curve(sequence, ph_values)

    table = Table(title=f"Net charge of {sequence or '(empty)'}", show_header=True)
    table.add_column("pH", justify="right")
    table.add_column("Charge", justify="right")
    for ph, charge in zip(ph_values, charges):
        table.add_row(f"{ph:.2f}", f"{charge:+.3f}")
    console.print(table)

    console.print(f"[bold]pI:[/bold] {isoelectric_point(sequence):.2f}")


@cli.command("tables")
def tables_cmd():
    """
    Show the residue constants used for every property.
    """
    from ..properties.tables import C_TERMINUS_PKA, N_TERMINUS_PKA, WATER_MASS, residue_table

    table = Table(title="Residue Constants", show_header=True, header_style="bold cyan")
    table.add_column("Residue", style="bold")
    table.add_column("Mass (Da)", justify="right")
    table.add_column("Eisenberg", justify="right")
    table.add_column("Boman", justify="right")
    table.add_column("pKa", justify="right")

    for row in residue_table():
        table.add_row(
            row["residue"],
            f"{row['mass']:.5f}",
            f"{row['hydrophobicity']:.2f}",
            f"{row['boman']:.2f}",
            "-" if row["pka"] is None else f"{row['pka']:.1f}",
        )

    console.print(table)
    console.print(
        f"Water: {WATER_MASS} Da  N-terminus pKa: {N_TERMINUS_PKA}  "
        f"C-terminus pKa: {C_TERMINUS_PKA}"
    )


@cli.command("validate-sequence")
@click.argument("sequence", required=False)
@click.option("--file", "-f", type=click.Path(exists=True), help="FASTA file to validate")
@click.option("--min-length", type=int, default=1, help="Minimum length (default: 1)")
@click.option("--max-length", type=int, default=None, help="Maximum length")
def validate_sequence(
    sequence: Optional[str],
    file: Optional[str],
    min_length: int,
    max_length: Optional[int],
):
    """
    Report non-canonical residues and length problems.

    Profiling never fails on these; they are zero-weighted. This command
    shows which peptides would be affected.

    \b
    Examples:
        peptidescope validate-sequence GIGKFLHSAKKFGKAFVGEIMNS
        peptidescope validate-sequence -f generated.fasta --max-length 32
    """
    from ..core.sequence import SequenceValidator, clean_sequence, parse_fasta

    validator = SequenceValidator(min_length=min_length, max_length=max_length)

    sequences_to_check = []

    if sequence:
        sequences_to_check.append(("command_line", clean_sequence(sequence)))

    if file:
        try:
            sequences_to_check.extend(parse_fasta(Path(file)))
        except OSError as e:
            console.print(f"[red]Error reading file:[/red] {e}")
            sys.exit(1)

    if not sequences_to_check:
        console.print("[yellow]No sequence provided. Use --help for usage.[/yellow]")
        sys.exit(1)

    all_valid = True

    for seq_id, seq in sequences_to_check:
        is_valid, errors = validator.validate(seq)

        if is_valid:
            console.print(f"[green]✓[/green] {seq_id}: Valid ({len(seq)} residues)")
        else:
            all_valid = False
            console.print(f"[red]✗[/red] {seq_id}: Invalid")
            for error in errors:
                console.print(f"    - {error}")

    sys.exit(0 if all_valid else 1)


def main():
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
