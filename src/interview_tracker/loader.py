"""Source text lookup for implementation references."""
import asyncio
import logging
import os
from pathlib import Path, PurePosixPath

logger = logging.getLogger(__name__)

SOURCE_ROOT = os.environ.get("INTERVIEW_TRACKER_SOURCE_ROOT")
SIMULATED_DELAY = 0.3

LINKED_LIST_SAMPLE = """/**
 * Singly Linked List Implementation
 */
public class SinglyLinkedList<T> {
    private static class Node<T> {
        private T data;
        private Node<T> next;

        public Node(T data) {
            this.data = data;
            this.next = null;
        }
    }

    private Node<T> head;
    private Node<T> tail;
    private int size;

    public void addFirst(T data) {
        Node<T> newNode = new Node<>(data);
        if (isEmpty()) {
            head = newNode;
            tail = newNode;
        } else {
            newNode.next = head;
            head = newNode;
        }
        size++;
    }

    // More methods would be here...
}"""

TREE_SAMPLE = """/**
 * Binary Tree Implementation
 */
public class BinaryTree<T> {
    private static class Node<T> {
        private T data;
        private Node<T> left;
        private Node<T> right;

        public Node(T data) {
            this.data = data;
        }
    }

    // Implementation would be here...
}"""


def simulated_source(path: str) -> str:
    """Canned source text standing in for the file at ``path``."""
    if "LinkedList" in path:
        return LINKED_LIST_SAMPLE
    if "Tree" in path:
        return TREE_SAMPLE
    filename = PurePosixPath(path).name
    stem = filename.removesuffix(".java").replace("-", "_").replace(" ", "_")
    class_name = "".join(part[:1].upper() + part[1:] for part in stem.split("_"))
    return (
        "/**\n"
        f" * Implementation of {filename}\n"
        " * This is a simulated view of the file at:\n"
        f" * {path}\n"
        " */\n"
        f"public class {class_name or 'Example'} {{\n"
        "    // Implementation would be here...\n"
        "\n"
        "    public static void main(String[] args) {\n"
        '        System.out.println("Example implementation");\n'
        "    }\n"
        "}"
    )


def _read_source(file_path: Path) -> str:
    if file_path.is_dir():
        files = sorted(p for p in file_path.iterdir() if p.is_file())
        if not files:
            raise FileNotFoundError(f"No source files in {file_path}")
        return "\n\n".join(f"// {p.name}\n{p.read_text(encoding='utf-8')}" for p in files)
    return file_path.read_text(encoding="utf-8")


async def load_code(path: str, source_root: str | Path | None = SOURCE_ROOT,
                    delay: float = SIMULATED_DELAY) -> str:
    """Return source text for an implementation path.

    Reads from ``source_root`` when one is configured, otherwise returns
    simulated text after ``delay`` seconds. Raises OSError when a
    configured root does not contain the path.
    """
    if source_root:
        return await asyncio.to_thread(_read_source, Path(source_root) / path)
    await asyncio.sleep(delay)
    return simulated_source(path)


def format_load_error(path: str, error: Exception) -> str:
    return f"// Error loading code from {path}\n// {error}"


async def load_code_for_display(path: str, source_root: str | Path | None = SOURCE_ROOT,
                                delay: float = SIMULATED_DELAY) -> str:
    try:
        return await load_code(path, source_root=source_root, delay=delay)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not load %s: %s", path, e)
        return format_load_error(path, e)
