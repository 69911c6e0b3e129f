def main() -> int:
    """Entry point for the application.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    from career_craft.api.main import main as api_main

    api_main()
    return 0
