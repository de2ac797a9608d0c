#!/usr/bin/env python3
"""
pugwidgets - Markup to widget-tree compiler

Compiles the HTML rendered from pug views into widget descriptor trees,
one JSON file per view, ready for a Flutter/Dart code emitter.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Philosophy:
    - Markup-first: Views are written as pug, one tag per widget
    - Typed attributes: ":" binds an expression, "@" a closure, plain is literal
    - Text is content: Every text line becomes a text widget
    - Forgiving: A malformed node yields a diagnostic, never a failed build

Usage:
    pugwidgets inputdir/ outputdir/ [--inputPattern "*.html"] [--optionsFile pugwidgets.yaml]

    Every matching file in inputdir/ is compiled to outputdir/<name>.widgets.json
    containing the import specifiers, the widget tree and any diagnostics.

Examples:
    # Compile every rendered view
    pugwidgets views/ build/

    # Custom options file and verbose output
    pugwidgets views/ build/ --optionsFile flutter-view.yaml -vv
"""

import sys
import json
import traceback
from pathlib import Path
from typing import NoReturn, cast
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import MarkupReader, MarkupSyntaxError, Compiler, imports_split, __version__, LOG, state_connectToLogger
from .config import appsettings, options_load, OptionsError
from .models import ProgramState, pipeline, CompileResult


DISPLAY_TITLE = r"""
                             _     _            _
  _ __  _   _  __ ___      _(_) __| | __ _  ___| |_ ___
 | '_ \| | | |/ _` \ \ /\ / / |/ _` |/ _` |/ _ \ __/ __|
 | |_) | |_| | (_| |\ V  V /| | (_| | (_| |  __/ |_\__ \
 | .__/ \__,_|\__, | \_/\_/ |_|\__,_|\__, |\___|\__|___/
 |_|          |___/                  |___/

  Markup to widget-tree compiler
"""

# Define CLI arguments
parser = ArgumentParser(
    description="pugwidgets - Compile rendered pug markup into widget descriptor trees",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputPattern",
    default=appsettings.input_pattern,
    type=str,
    help="Glob pattern selecting markup files in inputdir",
)

parser.add_argument(
    "--optionsFile",
    default=appsettings.options_file,
    type=str,
    help="Compile options file (YAML/JSON), relative to inputdir; defaults apply if missing",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def error_exit(state: ProgramState, message: str) -> NoReturn:
    """
    Print a stage error and exit with status 1.

    Called from inside an except block. The traceback of the exception
    being handled is printed too at verbosity 3 or in debug mode.
    """
    print(message, file=sys.stderr)
    if state.verbosity >= 3 or appsettings.debug_mode:
        traceback.print_exc()
    sys.exit(1)


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and collect the source files.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with added fields:
            - sourceFiles: Markup files matching inputPattern, sorted
            - envOK: True if environment is valid

    Exits:
        1 if inputdir does not exist or no file matches
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    if state.inputdir is None or not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    pattern = state.inputPattern or appsettings.input_pattern
    state.sourceFiles = sorted(path for path in state.inputdir.glob(pattern) if path.is_file())
    if not state.sourceFiles:
        print(f"Error: No files matching {pattern!r} in {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    LOG(f"Found {len(state.sourceFiles)} source files", level=2)

    if state.outputdir is None:
        print("Error: No output directory given", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.outputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def options_read(inputstate: ProgramState) -> ProgramState:
    """
    Load compile options from the options file.

    Args:
        inputstate: Program state with inputdir and optionsFile

    Returns:
        ProgramState with added field:
            - compileOptions: CompileOptions (defaults if the file is missing)

    Exits:
        1 if the options file exists but is invalid
    """

    state = inputstate.copy()
    # env_check has validated inputdir
    options_path = cast(Path, state.inputdir) / (state.optionsFile or appsettings.options_file)

    LOG(f"Loading compile options from {options_path}", level=2)
    try:
        state.compileOptions = options_load(options_path)
    except OptionsError as e:
        error_exit(state, f"Options error: {e}")

    LOG(f"Tag aliases: {state.compileOptions.tag_aliases}", level=3)
    return state


def sources_read(inputstate: ProgramState) -> ProgramState:
    """
    Read and parse every source file into an element tree.

    Args:
        inputstate: Program state with sourceFiles set

    Returns:
        ProgramState with added field:
            - parsedSources: Element list per source file

    Exits:
        1 if a file cannot be read or contains malformed markup
    """

    state = inputstate.copy()
    state.parsedSources = {}

    LOG("Reading source files...", level=1)

    for source_file in state.sourceFiles:
        try:
            source = source_file.read_text(encoding="utf-8")
            LOG(f"Read {len(source)} characters from {source_file.name}", level=2)
        except OSError as e:
            error_exit(state, f"Error reading input file: {e}")

        try:
            state.parsedSources[source_file] = MarkupReader(source).read()
        except MarkupSyntaxError as e:
            error_exit(state, f"Parse error in {source_file.name}: {e}")
        LOG(f"Parsed {len(state.parsedSources[source_file])} root elements", level=2)

    return state


def imports_gather(inputstate: ProgramState) -> ProgramState:
    """
    Separate <import> directives from each parsed source.

    Args:
        inputstate: Program state with parsedSources

    Returns:
        ProgramState with:
            - importsBySource: Import specifiers per source file
            - parsedSources: Element lists without root <import> tags
    """

    state = inputstate.copy()
    parsed = {}
    state.importsBySource = {}

    for source_file, elements in state.parsedSources.items():
        split = imports_split(elements)
        parsed[source_file] = split.elements
        state.importsBySource[source_file] = split.imports
        LOG(f"{source_file.name}: {len(split.imports)} imports", level=2)

    state.parsedSources = parsed
    return state


def widgets_build(inputstate: ProgramState) -> ProgramState:
    """
    Compile every element tree to widget descriptors.

    Args:
        inputstate: Program state with parsedSources and compileOptions

    Returns:
        ProgramState with added field:
            - compileResults: CompileResult per source file
    """

    state = inputstate.copy()
    state.compileResults = {}

    LOG("Compiling markup to widgets...", level=1)

    compiler = Compiler(state.compileOptions)
    for source_file, elements in state.parsedSources.items():
        widgets = compiler.compile(elements)
        state.compileResults[source_file] = CompileResult(
            widgets=widgets, diagnostics=list(compiler.diagnostics)
        )
        LOG(f"{source_file.name}: {len(widgets)} widgets", level=2)

    return state


def results_write(inputstate: ProgramState) -> ProgramState:
    """
    Write one JSON document per source file.

    Each document holds the source name, the import specifiers, the widget
    trees and the diagnostics.

    Args:
        inputstate: Program state with compileResults and importsBySource

    Returns:
        ProgramState with added field:
            - outputFiles: Paths of the written files

    Exits:
        1 if an output file cannot be written
    """

    state = inputstate.copy()
    state.outputFiles = []
    outputdir = cast(Path, state.outputdir)
    indent = appsettings.json_indent or None

    for source_file, result in state.compileResults.items():
        document = {
            'source': source_file.name,
            'imports': state.importsBySource.get(source_file, []),
            'widgets': [widget.dict_make() for widget in result.widgets],
            'diagnostics': [diagnostic.dict_make() for diagnostic in result.diagnostics],
        }
        output_file = outputdir / appsettings.outputName_make(source_file)
        try:
            output_file.write_text(json.dumps(document, indent=indent, ensure_ascii=False), encoding='utf-8')
        except OSError as e:
            error_exit(state, f"Error writing {output_file}: {e}")
        state.outputFiles.append(output_file)
        LOG(f"Wrote {output_file}", level=2)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display compilation results and diagnostics to user.

    Args:
        inputstate: Program state with compileResults populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if nothing was written, or in strict mode when any diagnostic exists
    """
    state: ProgramState = inputstate.copy()
    if not state.outputFiles:
        print("Error: Compilation failed", file=sys.stderr)
        sys.exit(1)

    diagnostic_count = 0
    for source_file, result in state.compileResults.items():
        for diagnostic in result.diagnostics:
            diagnostic_count += 1
            print(f"{source_file.name}: {diagnostic}", file=sys.stderr)

    widget_count = sum(len(result.widgets) for result in state.compileResults.values())
    LOG("\n✓ Compilation finished", level=1)
    LOG(f"  Files:       {len(state.outputFiles)}", level=1)
    LOG(f"  Widgets:     {widget_count}", level=1)
    LOG(f"  Diagnostics: {diagnostic_count}", level=1)

    if appsettings.strict_mode and diagnostic_count:
        print(f"Error: {diagnostic_count} diagnostics in strict mode", file=sys.stderr)
        sys.exit(1)
    return state


@chris_plugin(
    parser=parser,
    title="pugwidgets - Markup to widget-tree compiler",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - compile every markup view in inputdir to widget JSON.

    Orchestrates the full compilation pipeline:
        1. env_check: Validate input directory and collect sources
        2. options_read: Load compile options
        3. sources_read: Parse markup files to element trees
        4. imports_gather: Split off <import> directives
        5. widgets_build: Compile element trees to widget descriptors
        6. results_write: Write one JSON document per source
        7. results_report: Display results and diagnostics

    Args:
        options: CLI arguments from argparse
            - inputPattern: str - Glob for source files
            - optionsFile: str - Options file relative to inputdir
            - verbosity: int - Logging verbosity level (1-3)
        inputdir: Directory containing rendered markup files
        outputdir: Directory where widget JSON files are written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(
        state,
        env_check,
        options_read,
        sources_read,
        imports_gather,
        widgets_build,
        results_write,
        results_report,
    )


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
