# Preview snippets, one per language. Each one exercises as many mapped tokens as it can.

CSHARP = '''// C# preview
/// <summary>
/// Processes payments and raises status events.
/// </summary>
using System;
using System.Collections.Generic;
using System.Threading.Tasks;

namespace Payments.Core
{
    public enum PaymentStatus
    {
        Pending,
        Completed,
        Failed
    }

    public struct Money
    {
        public decimal Amount;
        public string Currency;
    }

    public delegate void PaymentEventHandler(object sender, EventArgs e);

    public interface IPaymentProcessor
    {
        Task<decimal> CalculateCommission(decimal amount);
    }

    /* Block comment
       spanning two lines */
    [Serializable]
    public class PaymentProcessor : IPaymentProcessor
    {
        private static readonly decimal DefaultRate = 2.5m;
        private decimal _commission;

        public static bool IsValidAmount(decimal amount)
        {
            return amount > 0 && amount != 1_000_000;
        }

        public async Task<decimal> CalculateCommission(decimal amount)
        {
            var fees = new[] { 10, 20, 30 };
            string label = $"Fee\\t{fees[0]}";

            if (!IsValidAmount(amount))
            {
                throw new ArgumentException("Invalid amount", nameof(amount));
            }

            _commission = amount * DefaultRate / 100;
            await Task.Delay(10);
            return _commission;
        }
    }
}
'''

SQL = '''-- SQL Server preview
/* Monthly revenue per customer */
DECLARE @StartDate DATE = '2024-01-01';
DECLARE @Limit INT = 25;

SELECT TOP (@Limit)
    c.CustomerId,
    c.Name,
    SUM(o.Total) AS Revenue,
    COUNT(*) AS Orders
FROM dbo.Customers AS c
INNER JOIN dbo.Orders AS o ON o.CustomerId = c.CustomerId
WHERE o.CreatedAt >= @StartDate
  AND o.Status <> 'Cancelled'
GROUP BY c.CustomerId, c.Name
HAVING SUM(o.Total) > 1000.50
ORDER BY Revenue DESC;
'''

TYPESCRIPT = '''// TypeScript preview
import { EventEmitter } from "events";

/**
 * Generic repository backed by a Map.
 * @param T entity type
 */
export interface Entity {
  id: number;
  name: string;
}

export class Repository<T extends Entity> extends EventEmitter {
  private static instances = 0;
  private readonly items = new Map<number, T>();

  constructor(private readonly label: string) {
    super();
    Repository.instances++;
  }

  add(item: T): this {
    this.items.set(item.id, item);
    this.emit("added", item);
    return this;
  }

  find(pattern: RegExp): T[] {
    return [...this.items.values()].filter((item) => pattern.test(item.name));
  }
}

const repo = new Repository<Entity>("users");
repo.add({ id: 1, name: "Ada" }).find(/^A/i);
const missing = null ?? undefined;
'''

JAVASCRIPT = '''// JavaScript preview
import fs from "fs";
export { loadConfig };

/**
 * Loads a JSON config from disk.
 * @param {string} path
 */
async function loadConfig(path, fallback = {}) {
  const raw = await fs.promises.readFile(path, "utf-8");
  const pattern = /"(\\w+)":/g;
  let count = 0;

  for (const match of raw.matchAll(pattern)) {
    count += 1;
  }

  if (count === 0 || raw === null) {
    return fallback;
  }
  return JSON.parse(raw);
}

class Cache extends Map {
  get size() {
    return super.size;
  }
}

const cache = new Cache();
console.log(cache.size, typeof undefined, 0x1f, 3.14);
'''

HTML = '''<!-- HTML preview -->
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Theme Preview</title>
  <link rel="stylesheet" href="style.css">
</head>
<body class="dark" id="main">
  <header>
    <h1>Welcome &amp; hello</h1>
    <a href="https://example.com" target="_blank">Docs</a>
  </header>
  <button type="button" disabled onclick="save()">Save</button>
</body>
</html>
'''

CSS = '''/* CSS preview */
@import url("base.css");

:root {
  --accent: #009688;
}

body, .container > p {
  margin: 0 auto;
  padding: calc(1rem + 2px);
  color: rgb(184, 197, 208);
  font-family: "JetBrains Mono", monospace;
}

#header .title:hover::before {
  content: "\\2014";
  display: inline-block;
  transform: rotate(45deg);
}

@media (max-width: 1024px) {
  .sidebar { display: none !important; }
}
'''

JSON = '''{
  "name": "cyan-harbor",
  "version": "1.0.0",
  "private": true,
  "license": null,
  "contributors": [
    { "name": "Ada", "commits": 42 },
    { "name": "Linus", "commits": 7.5 }
  ],
  "scripts": {
    "build": "node build.js",
    "editor": "node editor-server.js"
  }
}
'''

YAML = '''# YAML preview
version: 2.1
name: theme-build
on:
  push:
    branches: [main, develop]
jobs:
  build:
    runs-on: ubuntu-latest
    timeout: 30
    enabled: true
    steps:
      - uses: actions/checkout@v4
      - name: Install
        run: npm ci
      - name: Package
        run: |
          npm run build
          ls releases/
'''

MARKDOWN = '''# Markdown preview

Plain paragraph text with **bold words**, *italic words*,
~~struck out~~ and `inline code`.

> A block quote that spans
> two lines.

- bullet item
- another item
1. numbered item

[Project page](https://example.com)

---

```js
const answer = 42;
```
'''

BASH = '''#!/bin/bash
# Bash preview
set -euo pipefail

VERSION="1.0.0"
RELEASES_DIR="./releases"

build_theme() {
    local name="$1"
    echo "Building ${name} ${VERSION}"
    mkdir -p "$RELEASES_DIR"
    zip -r "$RELEASES_DIR/${name}-${VERSION}.jar" META-INF "${name}.xml" > /dev/null
}

for theme in cyan-harbor ocean-harbor; do
    if [[ -f "${theme}.xml" ]]; then
        build_theme "$theme"
    else
        printf 'missing %s\\n' "$theme" >&2
    fi
done
exit 0
'''

XML = '''<?xml version="1.0" encoding="UTF-8"?>
<!-- XML preview -->
<idea-plugin>
  <id>com.example.cyan-harbor</id>
  <name>Cyan Harbor</name>
  <version>1.0.0</version>
  <vendor email="theme@example.com" url="https://example.com">Example</vendor>
  <extensions defaultExtensionNs="com.intellij">
    <themeProvider id="cyan-harbor" path="/cyan-harbor.theme.json"/>
    <bundledColorScheme path="/cyan-harbor"/>
  </extensions>
  <description><![CDATA[A calm dark theme.]]></description>
</idea-plugin>
'''

SAMPLES = {
    'csharp': CSHARP,
    'sql': SQL,
    'typescript': TYPESCRIPT,
    'javascript': JAVASCRIPT,
    'html': HTML,
    'css': CSS,
    'json': JSON,
    'yaml': YAML,
    'markdown': MARKDOWN,
    'bash': BASH,
    'xml': XML,
}
