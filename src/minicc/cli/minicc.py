"""
minicc - Compiler Driver Command-Line Interface
===============================================

Runs the whole build for one C file: preprocess with the system
compiler, translate to assembly, then assemble and link with the system
compiler.

    hello.c ──gcc -E──▶ hello.i ──minicc──▶ hello.s ──gcc──▶ hello

Usage Examples
--------------
Build an executable:
    $ minicc hello.c && ./hello

Stop after a stage (nothing is written):
    $ minicc --lex hello.c
    $ minicc --parse hello.c
    $ minicc --codegen hello.c

Write assembly only:
    $ minicc -S hello.c

Exit Codes
----------
0 - Success
1 - Compilation or toolchain error
2 - Invalid arguments or file not found
3 - Internal error
"""

import logging
from pathlib import Path

import click

from minicc import __version__
from minicc import toolchain
from minicc.cli.errors import handle_cli_exception
from minicc.compiler import (
    ASTPrinter,
    CompilerOptions,
    CompilerResult,
    MiniCCompiler,
    Stage,
    write_assembly,
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def requested_stage(lex: bool, parse: bool, codegen: bool) -> Stage:
    """The earliest stop-point requested, or Stage.EMIT for a full build."""
    if lex:
        return Stage.LEX
    if parse:
        return Stage.PARSE
    if codegen:
        return Stage.CODEGEN
    return Stage.EMIT


@click.command()
@click.argument(
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--lex", is_flag=True, help="Run the lexer, then stop")
@click.option("--parse", is_flag=True, help="Run the lexer and parser, then stop")
@click.option("--codegen", is_flag=True, help="Run through instruction selection, then stop")
@click.option("-S", "assembly_only", is_flag=True, help="Write INPUT.s and stop before linking")
@click.option("-k", "--keep", is_flag=True, help="Keep the .s file after linking")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.version_option(version=__version__, prog_name="minicc")
def main(
    input_file: Path,
    lex: bool,
    parse: bool,
    codegen: bool,
    assembly_only: bool,
    keep: bool,
    verbose: bool,
) -> None:
    """
    Compile a C source file to an executable.

    INPUT_FILE is the C source file (.c) to compile. The executable is
    written next to it, named after it without the extension.

    \b
    Examples:
        minicc hello.c               # Builds ./hello
        minicc --parse hello.c       # Check syntax only
        minicc -S hello.c            # Writes hello.s
        minicc -v -k hello.c         # Verbose, keep hello.s

    \b
    Supported C subset:
        int main(void) { return <constant>; }
    """
    setup_logging(verbose)
    stage = requested_stage(lex, parse, codegen)

    try:
        config = toolchain.ToolchainConfig()
        if verbose:
            click.echo(f"Preprocessing {input_file} with {config.cc}")
        source = toolchain.preprocess(input_file, config)

        # Emission goes straight to the .s file below
        options = CompilerOptions(stop_after=min(stage, Stage.CODEGEN))
        result = MiniCCompiler(options).compile_source(source, str(input_file))

        if stage < Stage.EMIT:
            if verbose:
                _report_stage(result, stage)
            return

        asm_file = write_assembly(result.program, toolchain.assembly_path(input_file))
        if assembly_only:
            click.echo(f"Compiled {input_file} -> {asm_file}")
            return

        executable = toolchain.executable_path(input_file)
        try:
            toolchain.link(asm_file, executable, config)
        finally:
            if not keep:
                asm_file.unlink(missing_ok=True)

        click.echo(f"Compiled {input_file} -> {executable}")

    except Exception as e:
        handle_cli_exception(e, verbose)


def _report_stage(result: CompilerResult, stage: Stage) -> None:
    click.echo(f"Tokenized: {result.token_count} tokens")
    if stage >= Stage.PARSE:
        click.echo(ASTPrinter().print(result.ast))
    if stage >= Stage.CODEGEN:
        click.echo(f"Selected: {len(result.program.body.instructions)} instructions")


if __name__ == "__main__":
    main()
