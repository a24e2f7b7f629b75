def is_listing(value) -> bool:
    return isinstance(value, list) and len(value) > 0 and value[0] == ".text"


def pytest_assertrepr_compare(op, left, right):
    if is_listing(left) and is_listing(right) and op == "==":
        width = max(len(line) for line in left)
        lines = ["Comparing assembly listings (actual | expected):"]
        for i in range(max(len(left), len(right))):
            actual = left[i] if i < len(left) else ""
            expected = right[i] if i < len(right) else ""
            marker = " " if actual == expected else "!"
            lines.append(f"{marker} {actual:<{width}} | {expected}")
        return lines
