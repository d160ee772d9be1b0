import sys
from pathlib import Path

def main():
    if len(sys.argv) != 3:
        print("Usage: truncate_tail.py <file> <bytes>")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    n = int(sys.argv[2])
    b = p.read_bytes()
    if n <= 0 or n > len(b):
        print(f"Cannot drop {n} bytes from a {len(b)} byte file.")
        raise SystemExit(2)

    # Simulate a torn write: the last block loses its tail.
    p.write_bytes(b[:-n])
    print(f"Dropped {n} bytes from {p}, {len(b) - n} bytes left")

if __name__ == "__main__":
    main()
