"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Dict, Callable
from dataclasses import dataclass, field
from functools import reduce
import dataclasses


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the compilation pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as the compilation progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputPattern, optionsFile
        - env_check: sourceFiles, envOK
        - options_read: compileOptions
        - sources_read: parsedSources
        - imports_gather: importsBySource (parsedSources lose their <import> tags)
        - widgets_build: compileResults
        - results_write: outputFiles
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing markup sources
        outputdir: Directory receiving widget JSON files
        verbosity: Logging verbosity level (1-3)
        inputPattern: Glob selecting sources in inputdir
        optionsFile: Compile options file name, relative to inputdir
        envOK: Environment validation passed
        sourceFiles: Markup files to compile, sorted by name
        compileOptions: Loaded CompileOptions
        parsedSources: Element tree per source file
        importsBySource: Import specifiers per source file
        compileResults: CompileResult per source file
        outputFiles: Written output paths, in source order
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputPattern: Optional[str] = field(default=None)
    optionsFile: Optional[str] = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    sourceFiles: List[Path] = field(default_factory=list)
    compileOptions: Optional[Any] = field(default=None)  # CompileOptions at runtime
    parsedSources: Dict[Path, List[Any]] = field(default_factory=dict)  # List[Element] at runtime
    importsBySource: Dict[Path, List[str]] = field(default_factory=dict)
    compileResults: Dict[Path, Any] = field(default_factory=dict)  # CompileResult at runtime
    outputFiles: List[Path] = field(default_factory=list)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Merges CLI options with explicitly provided directories to create
        the initial program state for the compilation pipeline.

        Args:
            options: Parsed CLI arguments (inputPattern, optionsFile, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for compilation output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        # Only keep CLI options that are ProgramState fields
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        # Explicit directories override anything from the namespace
        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            options_read,
            sources_read,
            imports_gather,
            widgets_build,
            results_write,
            results_report,
        )
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
