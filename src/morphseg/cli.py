from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import List, Optional
import typer
from rich import print as rprint
from rich.logging import RichHandler
from rich.markup import escape
from .analyzer import Analyzer
from .config import DictConfig
from .errors import AnalyzerError
from .types import SplitMode


app = typer.Typer(add_completion=False)


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _dict_cfg(dict_dir: Optional[Path], user_dict: Optional[List[Path]]) -> DictConfig:
    users = tuple(user_dict or ())
    if dict_dir is None:
        return DictConfig(user_lexicons=users)
    # dict_dir is the directory holding lex.csv / matrix.def
    return DictConfig(name=dict_dir.name, root_dir=dict_dir.parent, user_lexicons=users)


@app.command("analyze")
def analyze(
    text: str,
    mode: SplitMode = typer.Option(SplitMode.C, case_sensitive=False, help="split mode: A (fine) .. C (coarse)"),
    dict_dir: Optional[Path] = typer.Option(None, help="directory with lex.csv and matrix.def"),
    user_dict: Optional[List[Path]] = typer.Option(None, help="user lexicon csv, repeatable"),
    as_json: bool = typer.Option(False, "--json", help="print morphemes as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    setup_logging(verbose)
    try:
        analyzer = Analyzer.from_config(_dict_cfg(dict_dir, user_dict))
        morphs = analyzer.analyze(text, mode)
    except AnalyzerError as e:
        rprint(f"[red]error[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps([m.to_dict() for m in morphs], ensure_ascii=False))
        return
    for m in morphs:
        source = "OOV" if m.is_oov() else f"D{m.dictionary_id()}"
        pos = ",".join(t for t in m.part_of_speech() if t != "*")
        rprint(f"{m.begin():>4}-{m.end():<4} {source:<4} {escape(pos):<24} {escape(m.surface())}"
               f"\t{escape(m.dictionary_form())}\t{escape(m.reading_form())}")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1"),
    port: int = typer.Option(8000),
    dict_dir: Optional[Path] = typer.Option(None, help="directory with lex.csv and matrix.def"),
    user_dict: Optional[List[Path]] = typer.Option(None, help="user lexicon csv, repeatable"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    import uvicorn
    from .api import create_app
    setup_logging(verbose)
    try:
        analyzer = Analyzer.from_config(_dict_cfg(dict_dir, user_dict))
    except AnalyzerError as e:
        rprint(f"[red]error[/red] {escape(str(e))}")
        raise typer.Exit(code=1)
    uvicorn.run(create_app(analyzer), host=host, port=port)


if __name__ == "__main__":
    app()
