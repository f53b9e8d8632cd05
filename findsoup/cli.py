"""Command-line interface for FindSoup - HTTP client for the classifier API."""

import logging
import sys

import httpx

from findsoup.config import get_config, setup_logging

logger = logging.getLogger(__name__)


class FindSoupCLI:
    """Interactive classifier client."""

    def __init__(self) -> None:
        """Initialize the CLI."""
        self.config = get_config()
        setup_logging(self.config)
        logger.info("FindSoup CLI initialized as HTTP client")

        self._display_config_status()

    def _display_config_status(self) -> None:
        """Display configuration status to the user."""
        print("\n" + "=" * 60)
        print("FINDSOUP - Soup & Cuisine Classifier")
        print("\n" + "=" * 60)
        print(f"server: {self.config.server_url}")
        print(f"tables: {self.config.taxonomy_dir or 'bundled'}")
        print("\n" + "=" * 60 + "\n")

    def run(self) -> None:
        """Run the CLI application."""
        print("Enter a restaurant name to see its cuisines and likely soups.\n")
        print("Examples:")
        print('  "Pho 88"')
        print('  "Ippudo Ramen"')
        print('  "Tom\'s American Diner | best chicken soup in town"')
        print("Add a description after a '|' to include review or summary text.")
        print("Type 'quit' or 'exit' to end the session.\n")

        while True:
            try:
                user_input = input("\nRestaurant: ").strip()

                if not user_input:
                    continue

                if user_input.lower() in ["quit", "exit", "q"]:
                    print("\nGoodbye!")
                    break

                name, _, description = user_input.partition("|")
                self._classify(name.strip(), description.strip())

            except KeyboardInterrupt:
                print("\n\nExiting FindSoup. Goodbye!")
                break
            except Exception as e:
                logger.error(f"Unexpected error: {e}", exc_info=True)
                print(f"\n⚠ An unexpected error occurred: {e}")
                print("Please try again or type 'quit' to exit.")

    def _classify(self, name: str, description: str = "") -> None:
        """Send one restaurant to the server and print the result.

        Args:
            name: Restaurant name
            description: Optional free text
        """
        try:
            with httpx.Client(timeout=30.0) as client:
                response = client.post(
                    f"{self.config.server_url}/classify",
                    json={"name": name, "free_text": description},
                )

                if response.status_code == 200:
                    result = response.json()
                    cuisines = result.get("cuisines") or []
                    soups = result.get("soup_types") or []

                    print(f"\nCuisines: {', '.join(cuisines) or 'unknown'}")
                    print(f"Soups:    {', '.join(soups)}")

                else:
                    error_data = (
                        response.json()
                        if response.headers.get("content-type", "").startswith(
                            "application/json"
                        )
                        else {}
                    )
                    error_msg = error_data.get("error", response.text)
                    print(f"\n⚠ Server error (status {response.status_code}): {error_msg}")

        except httpx.TimeoutException:
            logger.exception("Request timed out")
            print("\n⚠ Request timed out. Please try again.")
        except httpx.ConnectError:
            logger.exception("Cannot connect to server")
            print(f"\n⚠ Cannot connect to server at {self.config.server_url}")
            print("Make sure the server is running:")
            print("  python -m findsoup.server")


def main() -> None:
    """Main entry point for the CLI."""
    try:
        get_config()
    except Exception as e:
        print(f"Configuration error: {e}")
        print("\nCheck the environment variables or .env file.")
        sys.exit(1)

    cli = FindSoupCLI()
    cli.run()


if __name__ == "__main__":
    main()
