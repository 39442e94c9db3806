# MyQuran-CLI.py
import sys

try:
    from myquran.app import main
except ImportError as e:
    print(f"Fatal: Could not import the myquran package ({e}).", file=sys.stderr)
    print("Install it with: pip install -e .", file=sys.stderr)
    sys.exit(1)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n⚠ To exit, please type 'quit' or 'q'")
        sys.exit(1)
    except Exception:
        # Catch unexpected errors during startup or run
        print("\n--- UNEXPECTED ERROR ---", file=sys.stderr)
        import traceback
        traceback.print_exc()
        print("-----------------------", file=sys.stderr)
        sys.exit(1)
