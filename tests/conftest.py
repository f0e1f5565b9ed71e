"""Wspólne fixture'y: małe drzewa źródeł i dokumentów w tmp_path."""

from __future__ import annotations

import pathlib
import textwrap

import pytest

BOOKING_JAVA = textwrap.dedent("""\
    package dev.example.booking;

    public class BookingTools {
        // tools:start
        @Tool
        public String cancelBooking(String number) {
            return service.cancel(number);
        }
        // tools:end
        // outer:start
        int a;
        // inner:start
        int b;
        // inner:end
        // outer:end
    }
""")

POM_XML = textwrap.dedent("""\
    <project>
      <dependencies>
        <!-- deps:start -->
        <dependency>
          <artifactId>langchain4j</artifactId>
        </dependency>
        <!-- deps:end -->
      </dependencies>
    </project>
""")


def write(root: pathlib.Path, rel: str, text: str) -> pathlib.Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8", newline="")
    return path


@pytest.fixture
def src_root(tmp_path: pathlib.Path) -> pathlib.Path:
    root = tmp_path / "src"
    write(root, "dev/example/BookingTools.java", BOOKING_JAVA)
    write(root, "pom.xml", POM_XML)
    write(root, "Booking.src", "// fragmentA:start\nint x;\n// fragmentA:end\n")
    return root


@pytest.fixture
def docs_root(tmp_path: pathlib.Path) -> pathlib.Path:
    root = tmp_path / "docs"
    write(root, "index.md", (
        "# Function calling\n"
        "\n"
        "Start with [step 2](step-2.md).\n"
    ))
    write(root, "step-2.md", (
        "# Step 2\n"
        "\n"
        "```java\n"
        '@include "dev/example/BookingTools.java:tools"\n'
        "```\n"
        "\n"
        "Back to [the start](index.md#top).\n"
    ))
    write(root, "img/flow.png", "PNG")
    return root
