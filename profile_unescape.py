#!/usr/bin/env python3
"""Profile TurboEscape to find performance bottlenecks."""

import cProfile
import io
import pstats

from turboescape import escape, unescape

# Sample text
text = """
<p class="intro">Fish &amp; chips &mdash; &pound;4.50 &#40;incl. VAT&#41;</p>
<p>Caf&eacute; &#x201C;Le Monde&#x201D; &hearts; &unknown; &amp &&lt;</p>
<code>if (a &lt; b &amp;&amp; c &gt; d) { return [x + y]; }</code>
""" * 1000  # Repeat for more meaningful results

# Profile
pr = cProfile.Profile()
pr.enable()

for _ in range(10):
    decoded = unescape(text)
    _ = escape(decoded)

pr.disable()

# Print stats
s = io.StringIO()
ps = pstats.Stats(pr, stream=s).sort_stats("cumulative")
ps.print_stats(30)  # Top 30 functions
print(s.getvalue())
