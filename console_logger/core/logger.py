import json
from datetime import datetime
from pathlib import Path


class PrettyLogger:
    """Append-only, human-readable log file for console entries and server events."""

    RULE = "─" * 60

    def __init__(self, log_dir: str = "logs", filename: str = "console.log", long_text: int = 100):
        self.log_path = Path(log_dir) / filename
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.long_text = long_text

    def log(self, label: str, data):
        # keep the header on one line
        header = " ".join(str(label).split())

        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(f"\n{self.RULE}\n")
            f.write(f"⏱  {datetime.now().strftime('%H:%M:%S')}  │  {header}\n")
            f.write(f"{self.RULE}\n\n")

            if isinstance(data, dict):
                for key, value in data.items():
                    if isinstance(value, str) and len(value) > self.long_text:
                        # Long text gets its own block
                        f.write(f"📌 {key}:\n\n{value}\n\n")
                    elif isinstance(value, str):
                        f.write(f"• {key}: {value}\n")
                    else:
                        f.write(f"• {key}: {json.dumps(value, ensure_ascii=False)}\n")
            elif isinstance(data, str):
                f.write(f"{data}\n")
            else:
                f.write(json.dumps(data, indent=4, ensure_ascii=False) + "\n")

            f.write("\n")

    def read(self) -> str:
        if not self.log_path.exists():
            return ""
        return self.log_path.read_text(encoding="utf-8")

    def clear(self):
        self.log_path.write_text("", encoding="utf-8")
