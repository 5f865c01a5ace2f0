"""Static LeetCode reference data served by the listing resources and used
as enum values in tool schemas."""

PROBLEM_CATEGORIES = [
    "all-code-essentials",
    "algorithms",
    "database",
    "pandas",
    "javascript",
    "shell",
    "concurrency",
]

PROBLEM_TAGS = [
    "array",
    "string",
    "hash-table",
    "dynamic-programming",
    "math",
    "sorting",
    "greedy",
    "depth-first-search",
    "binary-search",
    "database",
    "matrix",
    "tree",
    "breadth-first-search",
    "bit-manipulation",
    "two-pointers",
    "prefix-sum",
    "heap-priority-queue",
    "simulation",
    "binary-tree",
    "graph",
    "stack",
    "counting",
    "sliding-window",
    "design",
    "enumeration",
    "backtracking",
    "union-find",
    "linked-list",
    "number-theory",
    "ordered-set",
    "monotonic-stack",
    "segment-tree",
    "trie",
    "combinatorics",
    "bitmask",
    "divide-and-conquer",
    "queue",
    "recursion",
    "geometry",
    "binary-indexed-tree",
    "memoization",
    "hash-function",
    "binary-search-tree",
    "shortest-path",
    "string-matching",
    "topological-sort",
    "rolling-hash",
    "game-theory",
    "interactive",
    "data-stream",
    "monotonic-queue",
    "brainteaser",
    "doubly-linked-list",
    "randomized",
    "merge-sort",
    "counting-sort",
    "iterator",
    "concurrency",
    "probability-and-statistics",
    "quickselect",
    "suffix-array",
    "line-sweep",
    "minimum-spanning-tree",
    "bucket-sort",
    "shell",
    "reservoir-sampling",
    "strongly-connected-component",
    "eulerian-circuit",
    "radix-sort",
    "rejection-sampling",
    "biconnected-component",
]

PROGRAMMING_LANGS = [
    "cpp",
    "java",
    "python",
    "python3",
    "c",
    "csharp",
    "javascript",
    "typescript",
    "php",
    "swift",
    "kotlin",
    "dart",
    "golang",
    "ruby",
    "scala",
    "rust",
    "racket",
    "erlang",
    "elixir",
]

DIFFICULTIES = ["EASY", "MEDIUM", "HARD"]

SOLUTION_ORDER_BY = ["HOT", "MOST_RECENT", "MOST_VOTES"]

# Languages kept in the simplified problem view
SNIPPET_LANGS = ("cpp", "python3", "java")
