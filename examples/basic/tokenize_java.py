"""Tokenize Java and print one line per token — zero config, zero deps."""

from pincel import DebugEmitter, lex

source = """import java.util.*;

class Greeter {
    public static void main(String[] args) {
        System.out.println("hello");
    }
}
"""

lex(source, DebugEmitter())
