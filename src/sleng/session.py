"""Interactive text menu over the slang dictionary."""

import logging

import click

from . import workflows
from .core.entries import Entry, parse_position, parse_synonyms
from .core.errors import NotRegisteredError, SlangError
from .ports import DocumentStore

logger = logging.getLogger(__name__)

LOGIN_ATTEMPTS = 3
CONFIRM_WORDS = {"yes", "y"}
RULE = "-" * 42


def _ask(text: str) -> str:
    return click.prompt(text, default="", show_default=False, prompt_suffix=" ").strip()


def run_session(store: DocumentStore) -> None:
    """Main menu: register, login or exit. A successful login opens the dictionary."""
    click.echo("Modern slang dictionary")
    click.echo("-----------------------")

    while True:
        click.echo("\n=== MAIN MENU ===")
        click.echo("1. Register")
        click.echo("2. Log in")
        click.echo("3. Exit")

        match _ask("Choose an action:"):
            case "1":
                if register_prompt(store):
                    click.echo("Registration complete! Now log in.")
            case "2":
                if login_prompt(store):
                    dictionary_menu(store)
                    return
            case "3":
                click.echo("Goodbye!")
                return
            case _:
                click.echo("Invalid choice, try again")


def register_prompt(store: DocumentStore) -> bool:
    """Ask for credentials and register the single user."""
    if workflows.current_user(store) is not None:
        click.echo("A user is already registered. Log in instead.")
        return False

    username = _ask("Choose a username:")
    password = _ask("Choose a password:")
    try:
        user = workflows.register_user(store, username, password)
    except SlangError as e:
        click.echo(f"Error: {e}")
        return False

    click.echo(f"User '{user.username}' registered!")
    return True


def login_prompt(store: DocumentStore, attempts: int = LOGIN_ATTEMPTS) -> bool:
    """Ask for credentials up to `attempts` times. Returns True on success."""
    if workflows.current_user(store) is None:
        click.echo("You need to register first!")
        return False

    for remaining in range(attempts, 0, -1):
        username = _ask("Username:")
        password = _ask("Password:")
        try:
            workflows.login_user(store, username, password)
        except NotRegisteredError:
            click.echo("You need to register first!")
            return False
        except SlangError as e:
            if remaining > 1:
                click.echo(f"{e}. Attempts left: {remaining - 1}")
            else:
                click.echo(f"{e}. Start again from the main menu.")
            continue

        click.echo(f"Welcome, {username}!")
        click.echo(f"Words loaded: {workflows.entry_count(store)}")
        return True

    logger.info("Login attempts exhausted")
    return False


def dictionary_menu(store: DocumentStore) -> None:
    """Post-login loop: list, add, delete or exit."""
    while True:
        click.echo("")
        click.echo("What would you like to do?")
        click.echo("1. Show all words")
        click.echo("2. Add a new word")
        click.echo("3. Delete a word")
        click.echo("4. Exit")

        match _ask("Your choice:"):
            case "1":
                show_entries(workflows.list_entries(store))
            case "2":
                add_entry_prompt(store)
            case "3":
                delete_entry_prompt(store)
            case "4":
                click.echo("Goodbye!")
                return
            case _:
                click.echo("No such option, try again")


def show_entries(entries: list[Entry]) -> None:
    if not entries:
        click.echo("The dictionary is empty")
        return

    click.echo(f"\nTotal words: {len(entries)}")
    click.echo("=" * len(RULE))
    for i, entry in enumerate(entries, start=1):
        click.echo(f"{i}. Word: {entry.word}")
        click.echo(f"   Meaning: {entry.meaning}")
        click.echo(f"   Example: {entry.example}")
        if entry.origin:
            click.echo(f"   Origin: {entry.origin}")
        if entry.synonyms:
            click.echo(f"   Synonyms: {', '.join(entry.synonyms)}")
        click.echo(RULE)


def add_entry_prompt(store: DocumentStore) -> None:
    click.echo("\nAdding a new word")
    word = _ask("Which word?")
    if any(e.matches(word) for e in workflows.list_entries(store)):
        click.echo(f"Word '{word}' is already in the dictionary")
        return

    entry = Entry(
        word=word,
        meaning=_ask("What does it mean?"),
        example=_ask("Give an example of usage:"),
        origin=_ask("Where does it come from (optional)?"),
        synonyms=parse_synonyms(_ask("Similar words (comma-separated, optional)?")),
    )
    try:
        workflows.add_entry(store, entry)
    except SlangError as e:
        click.echo(f"Error: {e}")
        return

    click.echo(f"Great! '{entry.word}' was added to the dictionary")


def delete_entry_prompt(store: DocumentStore) -> None:
    entries = workflows.list_entries(store)
    if not entries:
        click.echo("The dictionary is empty, nothing to delete")
        return

    show_entries(entries)
    raw = _ask("\nWhich word should be deleted (enter its number)?")
    position = parse_position(raw) or 0
    if position < 1 or position > len(entries):
        click.echo("No such number")
        return

    word = entries[position - 1].word
    confirm = _ask(f"Really delete '{word}'? (yes/no):")
    if confirm.lower() not in CONFIRM_WORDS:
        click.echo("Deletion cancelled")
        return

    try:
        workflows.delete_entry(store, position)
    except SlangError as e:
        click.echo(f"Error: {e}")
        return

    click.echo(f"Word '{word}' deleted")
