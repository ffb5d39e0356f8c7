"""Typer CLI application for LearnMate."""

import asyncio
import logging
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import IntPrompt
from rich.table import Table

from learnmate.agents.generator import GenerationClient
from learnmate.config.settings import get_settings
from learnmate.errors import LearnMateError
from learnmate.io.extractor import FileContentExtractor
from learnmate.io.notifier import Notifier
from learnmate.io.profile_store import JsonProfileStore
from learnmate.models.profile import LearningStyle
from learnmate.models.quiz import QuizStatus
from learnmate.models.study_aid import StudyAidArtifact
from learnmate.onboarding import SURVEY_QUESTIONS, score_survey
from learnmate.session.learner import LearnerSession

app = typer.Typer(
    name="learnmate",
    help="Personalised study aids and adaptive quizzes for your learning style",
    add_completion=False,
)

console = Console()


class ConsoleNotifier(Notifier):
    """Shows session events as short console messages."""

    def files_selected(self, count: int) -> None:
        console.print(f"[cyan]Files selected:[/cyan] {count} file(s) ready to process")

    def generation_succeeded(self) -> None:
        console.print("[green]✓[/green] Success!")

    def generation_failed(self, message: str) -> None:
        console.print(f"[red]Generation Failed:[/red] {message}", style="bold")

    def answer_correct(self) -> None:
        console.print("[green]Correct![/green]")

    def answer_incorrect(self, streak: int) -> None:
        console.print(f"[red]Incorrect.[/red] ({streak} in a row)")

    def style_switched(self, new_style: LearningStyle) -> None:
        console.print(
            Panel(
                f"We noticed you were struggling, so we switched you to "
                f"[bold]{new_style.label}[/bold].\n{new_style.description}",
                title="Learning Style Updated",
                border_style="yellow",
            )
        )

    def quiz_completed(self, score: int, total: int) -> None:
        console.print(f"\n[green bold]Quiz complete![/green bold] You scored {score}/{total}")


def configure_logging(level: str) -> None:
    """Route log records through Rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def create_session() -> LearnerSession:
    """Build a learner session from the current settings."""
    settings = get_settings()
    return LearnerSession(
        extractor=FileContentExtractor(max_chars=settings.max_content_chars),
        client=GenerationClient(settings=settings),
        store=JsonProfileStore(settings.profile_path),
        notifier=ConsoleNotifier(),
        settings=settings,
    )


def ask_option(count: int) -> int:
    """Prompt for a 1-based option number until a valid one is entered."""
    choices = [str(i) for i in range(1, count + 1)]
    return IntPrompt.ask("Your answer", choices=choices, console=console)


@app.command()
def onboard() -> None:
    """
    Take the learning style survey and save the result.
    """
    answers: list[LearningStyle] = []

    for question in SURVEY_QUESTIONS:
        console.print(
            f"\n[bold cyan]Question {question.id} of {len(SURVEY_QUESTIONS)}[/bold cyan]"
        )
        console.print(f"[bold]{question.question}[/bold]")
        for i, option in enumerate(question.options, start=1):
            console.print(f"  {i}. {option.label}")

        choice = ask_option(len(question.options))
        answers.append(question.options[choice - 1].style)

    style = score_survey(answers)
    JsonProfileStore(get_settings().profile_path).save(style)

    console.print(
        Panel(
            f"[bold]{style.label}[/bold]\n{style.description}",
            title="Your Learning Style",
            border_style="green",
        )
    )


@app.command()
def study(
    files: List[Path] = typer.Argument(
        ...,
        help="Study material (.txt, .md, .docx, .pdf). Only the first file is processed.",
        exists=True,
        dir_okay=False,
    ),
    quiz: bool = typer.Option(
        True,
        "--quiz/--no-quiz",
        help="Take an adaptive quiz after reading the study aid",
    ),
) -> None:
    """
    Create a personalised study aid and quiz yourself on it.

    Example:
        learnmate study notes/photosynthesis.pdf --quiz
    """
    session = create_session()

    try:
        asyncio.run(run_study(session, files, quiz))
    except LearnMateError as e:
        console.print(f"\n[red]Error:[/red] {e}", style="bold")
        raise typer.Exit(code=1)


async def run_study(session: LearnerSession, files: List[Path], quiz: bool) -> None:
    session.select_files(files)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(
            f"[cyan]Generating personalised content for {session.profile.current_style.label}...",
            total=None,
        )
        artifact = await session.create_study_aid()

    display_study_aid(artifact)

    helpful = typer.confirm("Was this study aid helpful?", default=True)
    session.record_feedback(helpful)

    if not quiz:
        return

    while True:
        with console.status("[cyan]Generating quiz..."):
            await session.generate_quiz()

        while True:
            run_quiz(session)
            if not typer.confirm("Retake this quiz?", default=False):
                break
            session.retake()

        if not typer.confirm("Generate a new quiz?", default=False):
            break

    display_profile(session)


def run_quiz(session: LearnerSession) -> None:
    """Ask every question of the loaded quiz until it is completed."""
    engine = session.engine

    while not engine.is_completed:
        question = engine.current_question
        position = engine.session.position

        console.print(f"\n[bold cyan]Question {position + 1} of {engine.total}[/bold cyan]")
        console.print(f"[bold]{question.question}[/bold]")
        for i, option in enumerate(question.options, start=1):
            console.print(f"  {i}. {option}")

        choice = ask_option(len(question.options))
        status = session.submit_answer(choice - 1)

        if status == QuizStatus.INCORRECT:
            console.print(f"The correct answer was: [bold]{question.correct_option}[/bold]")
            explanation = session.explanation_to_show()
            if explanation is not None:
                console.print(
                    Panel(
                        Markdown(explanation.text),
                        title=f"Explanation ({explanation.style.label})",
                        border_style="yellow",
                    )
                )

        session.advance()


def display_study_aid(artifact: StudyAidArtifact) -> None:
    """Render the study aid and its sources."""
    console.print()
    console.print(
        Panel(
            Markdown(artifact.text),
            title=f"Study Aid for {artifact.style_label}",
            subtitle=artifact.document_name,
            border_style="cyan",
        )
    )

    if artifact.sources:
        table = Table(title="Sources", border_style="cyan")
        table.add_column("Title", style="white")
        table.add_column("URL", style="cyan")
        for source in artifact.sources:
            table.add_row(source.title, source.uri)
        console.print(table)


def display_profile(session: LearnerSession) -> None:
    """Display the learner's current profile."""
    style = session.profile.current_style

    table = Table(title="Your Learning Profile", show_header=False, border_style="green")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Learning style", style.label)
    table.add_row("Description", style.description)
    table.add_row("Profile confidence", f"{session.profile.confidence}%")
    if session.processed_files:
        table.add_row("Files processed", ", ".join(session.processed_files))

    console.print()
    console.print(table)


@app.command()
def profile() -> None:
    """Show the saved learning style."""
    style = JsonProfileStore(get_settings().profile_path).load()
    console.print(
        Panel(
            f"[bold]{style.label}[/bold]\n{style.description}",
            title="Your Learning Style",
            border_style="cyan",
        )
    )


@app.command()
def info() -> None:
    """Display information about LearnMate."""
    info_text = """
[bold cyan]LearnMate AI[/bold cyan]
Version: 0.1.0

[bold]How it works:[/bold]
  • Onboarding survey picks your starting learning style
  • Study aids are tailored to visual, practical, or conceptual learners
  • Adaptive quizzes explain mistakes in your style
  • Three misses in a row switch you to the next style

[bold]Supported files:[/bold] .txt, .md, .docx, .pdf

[bold]Model:[/bold] Claude on AWS Bedrock
    """
    console.print(Panel(info_text, title="LearnMate Info", border_style="cyan"))


@app.callback()
def callback() -> None:
    """
    LearnMate AI - Study aids and quizzes that adapt to how you learn.
    """
    configure_logging(get_settings().log_level)


if __name__ == "__main__":
    app()
