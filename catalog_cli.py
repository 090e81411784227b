#!/usr/bin/env python3
"""Library Catalog CLI - browse and edit books on the catalog service."""
import argparse
import sys
import json
from tabulate import tabulate
from catalog.app import CatalogApp
from catalog.config import Config
from catalog.errors import CatalogError
from catalog.models import parse_year, year_in_range
import logging

logger = logging.getLogger(__name__)


def setup_logging(config: Config):
    """Configure root logging."""
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.WARNING),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )


def list_books(args, app: CatalogApp):
    """List books, optionally filtered by a search term."""
    if not app.load():
        return
    app.store.set_search_term(args.search)
    
    if app.store.is_empty():
        print("No books found")
        print(app.store.empty_state_message())
        return
    
    display_books(app.store.visible_books(), args.format)


def show_book(args, app: CatalogApp):
    """Show a single book."""
    try:
        book = app.client.get(args.id)
    except CatalogError as e:
        logger.error(f"Error fetching book {args.id}: {e}")
        app.store.set_error("Failed to fetch book")
        return
    
    display_books([book], args.format)


def check_year(year):
    """Warn about an unlikely publication year; the service has the final say."""
    if not year:
        return
    if not year_in_range(parse_year(year)):
        logger.warning(f"Publication year {year!r} is outside the expected range")


def add_book(args, app: CatalogApp):
    """Create a book from command-line fields."""
    check_year(args.year)
    app.session.start_create()
    app.session.update_field("title", args.title)
    app.session.update_field("author", args.author)
    app.session.update_field("isbn", args.isbn)
    app.session.update_field("publication_year", args.year or "")
    app.session.update_field("available", not args.unavailable)
    
    if app.submit():
        print(f"✅ Created: {args.title} by {args.author}")


def edit_book(args, app: CatalogApp):
    """Update only the fields that changed."""
    try:
        book = app.client.get(args.id)
    except CatalogError as e:
        logger.error(f"Error fetching book {args.id}: {e}")
        app.store.set_error("Failed to fetch book")
        return
    
    check_year(args.year)
    app.session.start_edit(book)
    for name, value in (
        ("title", args.title),
        ("author", args.author),
        ("isbn", args.isbn),
        ("publication_year", args.year),
        ("available", args.available),
    ):
        if value is not None:
            app.session.update_field(name, value)
    
    if not app.session.compute_payload():
        print("Nothing to update")
        app.session.cancel()
        return
    
    if app.submit():
        print(f"✅ Updated book {args.id}")


def ask_confirmation(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        # No terminal to answer from
        return False
    return answer.strip().lower() in ("y", "yes")


def delete_book(args, app: CatalogApp):
    """Delete a book after confirmation."""
    if args.yes:
        confirm = lambda prompt: True
    else:
        confirm = ask_confirmation
    
    if app.delete(args.id, confirm):
        print(f"✅ Deleted book {args.id}")


def show_health(args, app: CatalogApp):
    """Show service health."""
    try:
        print(json.dumps(app.client.health(), indent=2))
    except CatalogError as e:
        logger.error(f"Health check failed: {e}")
        app.store.set_error("Service unavailable")


def display_books(books, format_type: str):
    """Display books in specified format."""
    if format_type == "table":
        headers = ["ID", "Title", "Author", "ISBN", "Year", "Status"]
        rows = [
            [
                book.id,
                book.title[:50] + "..." if len(book.title) > 50 else book.title,
                book.author[:30] + "..." if len(book.author) > 30 else book.author,
                book.isbn,
                book.publication_year,
                book.status
            ]
            for book in books
        ]
        print("\n" + tabulate(rows, headers=headers, tablefmt="grid"))
    
    elif format_type == "json":
        print(json.dumps([book.to_dict() for book in books], indent=2))
    
    elif format_type == "compact":
        for i, book in enumerate(books, 1):
            print(f"{i}. {book.title} - {book.author}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Library Catalog - browse and edit books",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # List everything
  %(prog)s list
  
  # Search by title, author or ISBN
  %(prog)s list --search herbert --format compact
  
  # Add and edit
  %(prog)s add --title Dune --author "Frank Herbert" --isbn 9780441013593 --year 1965
  %(prog)s edit 1 --unavailable
  
  # Delete without prompting
  %(prog)s delete 1 --yes
        """
    )
    
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")
    
    # List command
    list_parser = subparsers.add_parser("list", help="List books")
    list_parser.add_argument("--search", default="", help="Filter by title, author or ISBN")
    list_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")
    
    # Show command
    show_parser = subparsers.add_parser("show", help="Show one book")
    show_parser.add_argument("id", help="Book ID")
    show_parser.add_argument("--format", choices=["table", "json", "compact"], default="table", help="Output format")
    
    # Add command
    add_parser = subparsers.add_parser("add", help="Add a book")
    add_parser.add_argument("--title", required=True)
    add_parser.add_argument("--author", required=True)
    add_parser.add_argument("--isbn", required=True)
    add_parser.add_argument("--year", help="Publication year")
    add_parser.add_argument("--unavailable", action="store_true", help="Mark as unavailable")
    
    # Edit command
    edit_parser = subparsers.add_parser("edit", help="Edit a book")
    edit_parser.add_argument("id", help="Book ID")
    edit_parser.add_argument("--title")
    edit_parser.add_argument("--author")
    edit_parser.add_argument("--isbn")
    edit_parser.add_argument("--year", help="Publication year")
    availability = edit_parser.add_mutually_exclusive_group()
    availability.add_argument("--available", dest="available", action="store_true", default=None)
    availability.add_argument("--unavailable", dest="available", action="store_false", default=None)
    
    # Delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a book")
    delete_parser.add_argument("id", help="Book ID")
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")
    
    # Health command
    subparsers.add_parser("health", help="Check service health")
    
    return parser


COMMANDS = {
    "list": list_books,
    "show": show_book,
    "add": add_book,
    "edit": edit_book,
    "delete": delete_book,
    "health": show_health,
}


def main(argv=None, app: CatalogApp = None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        sys.exit(1)
    
    config = Config()
    setup_logging(config)
    app = app or CatalogApp.from_config(config)
    
    try:
        COMMANDS[args.command](args, app)
    except KeyboardInterrupt:
        logger.info("\n⚠️  Interrupted by user")
        sys.exit(0)
    finally:
        app.client.close()
    
    if app.error:
        print(f"❌ {app.error}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
