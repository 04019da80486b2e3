from pathlib import Path

def safe_file_stem(title: str) -> str:
    stem = "".join(c for c in title if c.isalnum() or c in (' ', '_', '-')).strip()
    return stem or "untitled"

def save_draft(title: str, content: str, directory="data/drafts", draft_id: str = None) -> Path:
    path = Path(directory)
    path.mkdir(parents=True, exist_ok=True)
    stem = safe_file_stem(title)
    if draft_id:
        stem = f"{stem}_{safe_file_stem(draft_id)}"
    file_path = path / f"{stem}.txt"
    with file_path.open("w", encoding="utf-8") as f:
        f.write(f"{title}\n\n{content}\n")
    return file_path
