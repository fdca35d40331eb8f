"""Free-threading safe — tokenize 1000 sources in parallel over one shared table."""

from concurrent.futures import ThreadPoolExecutor

from pincel import tokenize

sources = [f"int value{i} = {i};" for i in range(1000)]


def count_tokens(source: str) -> int:
    return sum(1 for _ in tokenize(source, "java"))


with ThreadPoolExecutor(max_workers=8) as ex:
    counts = list(ex.map(count_tokens, sources))

print(f"Tokenized {len(counts)} sources in parallel")
print("Tokens in first source:", counts[0])
print("Total tokens:", sum(counts))
