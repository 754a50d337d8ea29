#!/usr/bin/env python3
"""Profile tagcheck to find performance bottlenecks."""

import cProfile
import io
import pstats

from tagcheck import validate_html

# Sample HTML
html = """
<!DOCTYPE html>
<html>
<head><title>Test</title><style>.p > a { color: red; }</style></head>
<body>
    <div class="container" data-note="a > b">
        <!-- product block -->
        <p>Paragraph 1<br>with a break</p>
        <p>Paragraph 2 <img src="x.png" alt='say "hi"' /></p>
        <table>
            <tr><td>Cell 1</td><td>Cell 2</td></tr>
            <tr><td>Cell 3</td><td>Cell 4</td></tr>
        </table>
        <script>if (a < b) { render('</div>'); }</script>
    </div>
</body>
</html>
""" * 100  # Repeat for more meaningful results

# Profile
pr = cProfile.Profile()
pr.enable()

for _ in range(10):
    result = validate_html(html)
    _ = result.valid

pr.disable()

# Print stats
s = io.StringIO()
ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
ps.print_stats(50)  # Top 50 functions
print(s.getvalue())
