"""Built-in demo articles: the catalog records and the source text per extension."""
from __future__ import annotations

from .models import ArticleRecord

ARTICLES: tuple[ArticleRecord, ...] = (
    ArticleRecord(
        filename="example.js",
        title="JavaScript Array Methods",
        language="JavaScript",
        date="Jan 15, 2023",
        description="Examples of useful JavaScript array methods",
    ),
    ArticleRecord(
        filename="example.py",
        title="Python Data Processing",
        language="Python",
        date="Feb 3, 2023",
        description="Efficient data processing with Python",
    ),
    ArticleRecord(
        filename="example.html",
        title="HTML5 Semantic Elements",
        language="HTML",
        date="Mar 22, 2023",
        description="Using semantic HTML5 elements for better structure",
    ),
    ArticleRecord(
        filename="example.css",
        title="CSS Flexbox Layout",
        language="CSS",
        date="Apr 10, 2023",
        description="Creating responsive layouts with CSS Flexbox",
    ),
)

SOURCES: dict[str, str] = {
    "js": """// JavaScript Example: Array Methods
const numbers = [1, 2, 3, 4, 5];

// Map: Transform each element
const doubled = numbers.map(n => n * 2);
console.log(doubled); // [2, 4, 6, 8, 10]

// Filter: Keep elements that pass a test
const even = numbers.filter(n => n % 2 === 0);
console.log(even); // [2, 4]

// Reduce: Accumulate values
const sum = numbers.reduce((acc, n) => acc + n, 0);
console.log(sum); // 15

// Find: Get first matching element
const firstEven = numbers.find(n => n % 2 === 0);
console.log(firstEven); // 2

// Some: Check if any element passes test
const hasEven = numbers.some(n => n % 2 === 0);
console.log(hasEven); // true""",
    "py": '''# Python Example: Data Processing
def process_data(data):
    """Process a list of data points"""
    # Filter out None values
    clean_data = [x for x in data if x is not None]
    
    # Calculate statistics
    total = sum(clean_data)
    average = total / len(clean_data) if clean_data else 0
    maximum = max(clean_data) if clean_data else 0
    
    return {
        'total': total,
        'average': average,
        'maximum': maximum,
        'count': len(clean_data)
    }

# Example usage
data = [10, 20, None, 30, 40, None, 50]
result = process_data(data)
print(f"Processed {result['count']} items")
print(f"Total: {result['total']}, Average: {result['average']:.2f}")''',
    "html": """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Semantic HTML Example</title>
</head>
<body>
    <header>
        <h1>Website Header</h1>
        <nav>
            <ul>
                <li><a href="#home">Home</a></li>
                <li><a href="#about">About</a></li>
                <li><a href="#contact">Contact</a></li>
            </ul>
        </nav>
    </header>
    
    <main>
        <article>
            <header>
                <h2>Article Title</h2>
                <p>Published on <time datetime="2023-01-15">January 15, 2023</time></p>
            </header>
            
            <section>
                <h3>Introduction</h3>
                <p>This is the introduction section of the article.</p>
            </section>
            
            <section>
                <h3>Main Content</h3>
                <p>This is the main content section with more details.</p>
            </section>
            
            <footer>
                <p>Article footer with author information.</p>
            </footer>
        </article>
    </main>
    
    <aside>
        <h3>Related Content</h3>
        <p>Additional information or links.</p>
    </aside>
    
    <footer>
        <p>&copy; 2023 Website Name. All rights reserved.</p>
    </footer>
</body>
</html>""",
    "css": """/* CSS Example: Flexbox Layout */
.container {
    display: flex;
    flex-direction: column;
    min-height: 100vh;
    background-color: #f5f5f5;
}

.header {
    background-color: #2c3e50;
    color: white;
    padding: 1rem 2rem;
    box-shadow: 0 2px 4px rgba(0,0,0,0.1);
}

.main-content {
    display: flex;
    flex: 1;
    padding: 2rem;
    gap: 2rem;
}

.sidebar {
    flex: 0 0 250px;
    background-color: white;
    padding: 1.5rem;
    border-radius: 8px;
    box-shadow: 0 2px 4px rgba(0,0,0,0.1);
}

.content {
    flex: 1;
    background-color: white;
    padding: 1.5rem;
    border-radius: 8px;
    box-shadow: 0 2px 4px rgba(0,0,0,0.1);
}

.footer {
    background-color: #34495e;
    color: white;
    text-align: center;
    padding: 1rem;
}

/* Responsive design */
@media (max-width: 768px) {
    .main-content {
        flex-direction: column;
        padding: 1rem;
    }
    
    .sidebar {
        flex: none;
        order: 2;
    }
}""",
}


def placeholder_for(filename: str) -> str:
    return f"// Code for {filename} would be loaded here"
