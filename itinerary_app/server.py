import os
import subprocess
import sys

APP_DIR = os.path.dirname(os.path.abspath(__file__))
UI_PATH = os.path.join(APP_DIR, "ui.py")


def streamlit_command(ui_path: str = UI_PATH, port: int = None) -> list:
    """Command line that serves the itinerary page with the current interpreter."""
    command = [sys.executable, "-m", "streamlit", "run", ui_path]
    if port is not None:
        command += ["--server.port", str(port)]
    return command


def run_streamlit(port: int = None) -> int:
    """
    Launches the Itinerary Prettifier page in Streamlit.

    Args:
        port: Port to serve on. Streamlit's default is used when omitted.

    Returns:
        The process exit status, 1 if the page or Streamlit is missing.
    """
    if not os.path.exists(UI_PATH):
        print(f"Error: ui.py not found at {UI_PATH}")
        return 1

    print(f"Launching Itinerary Prettifier from: {UI_PATH}")

    try:
        subprocess.run(streamlit_command(UI_PATH, port), check=True)
    except FileNotFoundError:
        print("Error: 'streamlit' command not found.")
        print("Please make sure Streamlit is installed correctly ('pip install streamlit').")
        return 1
    except subprocess.CalledProcessError as e:
        print(f"An error occurred while running the Streamlit app: {e}")
        return e.returncode
    return 0


if __name__ == "__main__":
    port_arg = int(sys.argv[1]) if len(sys.argv) > 1 else None
    sys.exit(run_streamlit(port_arg))
