# docqa/interface/cli.py

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich import box
from rich.text import Text

from docqa.domain.models import QueryAnswer


console = Console()


def display_welcome_banner() -> None:
    console.print(Panel.fit(
        "[bold cyan]📄 Document Q&A[/bold cyan]\n"
        "[dim]TF-IDF retrieval + Gemini answers[/dim]",
        box=box.DOUBLE,
        border_style="cyan",
    ))


def display_corpus_status(num_documents: int, num_chunks: int) -> None:
    console.print(
        f"\n[green]✓[/green] Corpus built: [bold]{num_documents}[/bold] documents, "
        f"[bold]{num_chunks}[/bold] chunks ready for questions.\n"
    )


def prompt_for_query() -> str:
    return Prompt.ask("\n[bold yellow]❓ Your question[/bold yellow]")


def display_answer(query: str, result: QueryAnswer) -> None:
    console.print(f"\n[bold]Question:[/bold] [italic]\"{query}\"[/italic]\n")
    console.print(Panel(
        result.answer,
        title="[bold]Answer[/bold]",
        subtitle=f"[dim]{result.elapsed_ms:.0f} ms[/dim]",
        border_style="cyan",
        box=box.ROUNDED,
        padding=(1, 2),
    ))

    for rank, citation in enumerate(result.citations, start=1):
        score_color = _score_to_color(citation.score)

        panel_content = Text()
        panel_content.append("📄 Source: ", style="dim")
        panel_content.append(citation.document_name, style="bold white")
        panel_content.append("\n🎯 Score: ")
        panel_content.append(f"{citation.score:.4f}", style=score_color)
        panel_content.append(f"\n\n{citation.excerpt}")

        console.print(Panel(
            panel_content,
            title=f"[bold]#{rank}[/bold]",
            border_style=score_color,
            box=box.ROUNDED,
            padding=(1, 2),
        ))


def display_error(message: str) -> None:
    console.print(f"\n[bold red]✗ Error:[/bold red] {message}\n")


def ask_continue() -> bool:
    answer = Prompt.ask(
        "\n[dim]Ask another question?[/dim]",
        choices=["y", "n"],
        default="y",
    )
    return answer.lower() == "y"


def _score_to_color(score: float) -> str:
    # TF-IDF cosine scores run lower than dense-embedding scores
    if score >= 0.5:
        return "green"
    elif score >= 0.2:
        return "yellow"
    else:
        return "red"
