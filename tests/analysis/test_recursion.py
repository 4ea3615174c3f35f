"""Tests for recursion detection and classification."""

from asymptote.analysis.recursion import (
    classify_recursion,
    count_calls,
    detect_recursion,
    function_body,
    function_name,
)
from asymptote.profiles import strip_comments

from tests.analysis.samples import (
    C_FIB,
    C_MULTILINE_FIB,
    JAVA_FACTORIAL,
    JAVA_GENERIC_RECURSION,
    JAVA_MULTILINE_FIB,
    PY_FACTORIAL,
    PY_FIB,
    PY_LINEAR_RECURSION,
)


def _detect(profile, text):
    return detect_recursion(strip_comments(text, profile), profile)


class TestClassifyRecursion:
    """Tests for mapping call-site counts to hints."""

    def test_single_occurrence_is_not_recursion(self):
        assert classify_recursion("f", 1, "def f(x):\n    return x") is None
        assert classify_recursion("f", 0, "") is None

    def test_missing_name(self):
        assert classify_recursion("", 3, "") is None

    def test_one_self_call_is_linear(self):
        signal = classify_recursion("f", 2, "def f(n):\n    return f(n - 1) + 1")
        assert signal.complexity_hint == "linear"
        assert signal.self_call_count == 1
        assert signal.direct

    def test_two_self_calls_branch(self):
        signal = classify_recursion("f", 3, "return f(n - 1) + f(n - 2)")
        assert signal.complexity_hint == "exponential"
        assert signal.self_call_count == 2

    def test_multiplied_return_is_factorial(self):
        assert classify_recursion("f", 2, "return n * f(n - 1)").complexity_hint == "factorial"
        assert classify_recursion("f", 2, "return f(n - 1) * n").complexity_hint == "factorial"

    def test_factorial_outranks_branching(self):
        body = "return n * f(n - 1) + f(n - 2)"
        assert classify_recursion("f", 3, body).complexity_hint == "factorial"


class TestFunctionDiscovery:
    """Tests for signature matching and body extraction."""

    def test_python_name(self, python_profile):
        assert function_name(PY_FIB, python_profile) == "fib"
        assert function_name("async def fetch(url):\n    pass", python_profile) == "fetch"

    def test_c_name(self, c_profile):
        assert function_name(C_FIB, c_profile) == "fib"

    def test_java_name_skips_class_header(self, java_profile):
        assert function_name(JAVA_FACTORIAL, java_profile) == "fact"

    def test_java_generic_method_name(self, java_profile):
        assert function_name(JAVA_GENERIC_RECURSION, java_profile) == "count"
        header = "    public static <K, V> Map<K, List<V>> group(List<V> xs) {\n"
        assert function_name(header, java_profile) == "group"

    def test_signature_split_across_lines(self, java_profile, c_profile):
        assert function_name(JAVA_MULTILINE_FIB, java_profile) == "fib"
        assert function_name(C_MULTILINE_FIB, c_profile) == "fib"

    def test_control_flow_is_not_a_function(self, c_profile):
        assert function_name("    if (n < 2) {\n", c_profile) == ""
        assert function_name("    return fib(n - 1);\n", c_profile) == ""

    def test_count_calls_includes_definition(self):
        assert count_calls("fib", PY_FIB) == 3
        assert count_calls("fi", PY_FIB) == 0

    def test_python_body_ends_at_dedent(self, python_profile):
        code = "def a():\n    return 1\n\ndef b():\n    return 2\n"
        assert function_body(code, 0, python_profile) == "def a():\n    return 1\n"

    def test_brace_body_ends_at_matching_brace(self, c_profile):
        code = "int a(void) {\n    if (x) { y(); }\n}\nint b(void) {}\n"
        assert function_body(code, 0, c_profile) == "int a(void) {\n    if (x) { y(); }\n}"


class TestDetectRecursion:
    """Tests for scanning whole snippets."""

    def test_python_fibonacci(self, python_profile):
        (signal,) = _detect(python_profile, PY_FIB)
        assert signal.function_name == "fib"
        assert signal.self_call_count == 2
        assert signal.complexity_hint == "exponential"

    def test_python_factorial(self, python_profile):
        (signal,) = _detect(python_profile, PY_FACTORIAL)
        assert signal.complexity_hint == "factorial"

    def test_python_linear(self, python_profile):
        (signal,) = _detect(python_profile, PY_LINEAR_RECURSION)
        assert signal.complexity_hint == "linear"
        assert signal.self_call_count == 1

    def test_c_fibonacci(self, c_profile):
        (signal,) = _detect(c_profile, C_FIB)
        assert signal.function_name == "fib"
        assert signal.complexity_hint == "exponential"

    def test_java_factorial(self, java_profile):
        (signal,) = _detect(java_profile, JAVA_FACTORIAL)
        assert signal.function_name == "fact"
        assert signal.complexity_hint == "factorial"

    def test_java_generic_method(self, java_profile):
        (signal,) = _detect(java_profile, JAVA_GENERIC_RECURSION)
        assert signal.function_name == "count"
        assert signal.complexity_hint == "exponential"

    def test_multiline_signatures(self, java_profile, c_profile):
        for profile, code in ((java_profile, JAVA_MULTILINE_FIB), (c_profile, C_MULTILINE_FIB)):
            (signal,) = _detect(profile, code)
            assert signal.function_name == "fib"
            assert signal.self_call_count == 2
            assert signal.complexity_hint == "exponential"

    def test_uncalled_function(self, python_profile):
        assert _detect(python_profile, "def helper(x):\n    return x + 1\n") == []

    def test_commented_call_does_not_count(self, python_profile):
        code = "def f(n):\n    # f(n - 1)\n    return n\n"
        assert _detect(python_profile, code) == []
