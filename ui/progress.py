# ui/progress.py

def progress_bar(percent: int, length: int = 12):
    """Генерирует текстовый progress bar (emoji/блоки)"""
    percent = max(0, min(100, percent))
    done = int(length * percent // 100)
    todo = length - done
    return "🟩" * done + "⬜️" * todo + f" {percent}%"

def blocks_progress_bar(done: int, total: int, percent: int):
    return f"{progress_bar(percent)} ({done}/{total})"

def day_emoji(percent: int, stored: bool = True):
    if not stored:
        return "▫️"
    if percent >= 100:
        return "🏆"
    elif percent >= 67:
        return "🔥"
    elif percent >= 34:
        return "✨"
    else:
        return "🔹"
